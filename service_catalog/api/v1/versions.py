"""버전 라우터 — 서비스 하위 버전 엔드포인트.

Version Router — endpoints for versions nested under their owning service:
/services/{service_id}/versions[/{version_id}]
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.database import get_db
from service_catalog.schemas.catalog import VersionCreate, VersionResponse, VersionUpdate
from service_catalog.services.catalog_service import catalog_service

router: APIRouter = APIRouter()


@router.get("/services/{service_id}/versions", response_model=list[VersionResponse])
async def list_service_versions(
    service_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[VersionResponse]:
    """서비스의 버전 목록을 최신순으로 조회합니다. 서비스가 없으면 404.

    List a service's versions, newest first. 404 when the service is missing.
    """
    return await catalog_service.get_service_versions(db, service_id)


@router.post("/services/{service_id}/versions", response_model=VersionResponse, status_code=201)
async def create_version(
    service_id: int,
    data: VersionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VersionResponse:
    """서비스에 새 버전을 생성합니다.

    Create a version under the service.
    """
    return await catalog_service.create_version(db, service_id, data)


@router.get("/services/{service_id}/versions/{version_id}", response_model=VersionResponse)
async def get_version(
    service_id: int,
    version_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VersionResponse:
    """서비스 범위에서 버전을 조회합니다.

    Retrieve a version scoped to its service.
    """
    return await catalog_service.get_service_version(db, service_id, version_id)


@router.patch("/services/{service_id}/versions/{version_id}", response_model=VersionResponse)
async def update_version(
    service_id: int,
    version_id: int,
    data: VersionUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VersionResponse:
    """버전을 부분 수정합니다.

    Partially update a version.
    """
    return await catalog_service.update_version(db, service_id, version_id, data)


@router.delete("/services/{service_id}/versions/{version_id}", status_code=204)
async def delete_version(
    service_id: int,
    version_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """버전을 삭제합니다.

    Delete a version.
    """
    await catalog_service.delete_version(db, service_id, version_id)
