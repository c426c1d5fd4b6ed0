"""서비스 라우터 — 서비스 CRUD 및 목록 엔드포인트.

Service Router — list and CRUD endpoints for services.
Query parameters are normalized here (page >= 1, 1 <= limit <= 100) before
reaching the catalog service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.database import get_db
from service_catalog.schemas.catalog import (
    ServiceCreate,
    ServiceDetailResponse,
    ServiceFilter,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
)
from service_catalog.services.catalog_service import catalog_service
from service_catalog.utils.pagination import DEFAULT_LIMIT, normalize_limit, normalize_page

router: APIRouter = APIRouter()


@router.get("", response_model=ServiceListResponse)
async def list_services(
    db: Annotated[AsyncSession, Depends(get_db)],
    name: str = "",
    description: str = "",
    sort: str = "name",
    order: str = "asc",
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = DEFAULT_LIMIT,
) -> ServiceListResponse:
    """서비스 목록을 필터/정렬/페이지 조건으로 조회합니다.

    List services with case-insensitive name/description filters,
    sorting (name | created_at | updated_at, asc | desc) and pagination.
    """
    service_filter = ServiceFilter(
        name=name,
        description=description,
        sort=sort,
        order=order,
        page=normalize_page(page),
        limit=normalize_limit(limit),
    )
    return await catalog_service.list_services(db, service_filter)


@router.get("/{service_id}", response_model=ServiceDetailResponse)
async def get_service(
    service_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ServiceDetailResponse:
    """서비스 상세 정보를 조회합니다 (버전 포함).

    Retrieve a service with its versions.
    """
    return await catalog_service.get_service(db, service_id)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ServiceResponse:
    """새 서비스를 생성합니다. 이름이 중복되면 409.

    Create a new service. Duplicate names answer 409.
    """
    return await catalog_service.create_service(db, data)


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ServiceResponse:
    """서비스 정보를 부분 수정합니다.

    Partially update a service; only supplied fields change.
    """
    return await catalog_service.update_service(db, service_id, data)


@router.delete("/{service_id}", status_code=204)
async def delete_service(
    service_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """서비스와 모든 버전을 삭제합니다.

    Delete a service together with all of its versions.
    """
    await catalog_service.delete_service(db, service_id)
