"""서비스 레포지토리 — 서비스 CRUD, 필터/정렬/페이지 목록, 연쇄 삭제.

Service Repository — CRUD, filtered/sorted/paginated listing and cascading
delete for services.

Version counts are never stored: the list query attaches them with a single
grouped COUNT over the ids of the current page, and the detail query derives
them from the eagerly loaded versions.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from service_catalog.models.catalog import Service, Version
from service_catalog.repositories.base import BaseRepository
from service_catalog.schemas.catalog import ServiceFilter
from service_catalog.utils.pagination import paginate
from service_catalog.utils.store_errors import store_errors

# 정렬 허용 컬럼 — 그 외 값은 name으로 대체 (Whitelisted sort columns; anything else falls back to name)
SORT_COLUMNS: dict[str, Any] = {
    "name": Service.name,
    "created_at": Service.created_at,
    "updated_at": Service.updated_at,
}
DEFAULT_SORT: str = "name"

_NAME_CONFLICT: str = "A service with this name already exists"


class ServiceRepository(BaseRepository[Service]):
    """서비스 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the services table.
    Expects pre-validated input (page >= 1, 1 <= limit <= 100).
    """

    def __init__(self) -> None:
        super().__init__(Service)

    def _build_list_query(self, service_filter: ServiceFilter) -> Select:
        """필터와 정렬이 적용된 목록 쿼리를 구성합니다.

        Build the filtered and ordered list query. Empty filter strings mean
        "no filter"; both filters are AND-combined when present. ``%`` and
        ``_`` in the filter text match literally.
        """
        query: Select = select(Service)

        if service_filter.name:
            query = query.where(Service.name.icontains(service_filter.name, autoescape=True))
        if service_filter.description:
            query = query.where(Service.description.icontains(service_filter.description, autoescape=True))

        column = SORT_COLUMNS.get(service_filter.sort, SORT_COLUMNS[DEFAULT_SORT])
        if service_filter.order == "desc":
            query = query.order_by(column.desc(), Service.id.desc())
        else:
            query = query.order_by(column.asc(), Service.id.asc())
        return query

    async def count_versions(
        self,
        db: AsyncSession,
        service_ids: Sequence[int],
    ) -> dict[int, int]:
        """서비스별 버전 수를 하나의 GROUP BY 쿼리로 계산합니다.

        Count versions per service with a single grouped query (no N+1).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_ids: 대상 서비스 ID 목록 (Ids of the services on the page)

        Returns:
            dict[int, int]: {서비스 ID: 버전 수}, 버전이 없는 서비스는 제외
                            (Mapping of service id to count; services without versions are absent)
        """
        if not service_ids:
            return {}

        query: Select = (
            select(Version.service_id, func.count(Version.id))
            .where(Version.service_id.in_(service_ids))
            .group_by(Version.service_id)
        )
        async with store_errors():
            result = await db.execute(query)
            return {service_id: count for service_id, count in result.all()}

    async def get_paginated(
        self,
        db: AsyncSession,
        service_filter: ServiceFilter,
    ) -> tuple[list[Service], int]:
        """필터/정렬/페이지가 적용된 서비스 목록을 조회합니다.

        List services matching the filter. The total is counted before
        pagination; ``version_count`` is attached to every returned service
        (0 when it owns no versions).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_filter: 목록 필터 (Pre-validated list filter)

        Returns:
            tuple[list[Service], int]: (현재 페이지 서비스, 전체 개수)
                                       (Services on the page, total matches)
        """
        query: Select = self._build_list_query(service_filter)
        async with store_errors():
            items, total = await paginate(db, query, service_filter.page, service_filter.limit)

        services: list[Service] = list(items)
        counts: dict[int, int] = await self.count_versions(db, [s.id for s in services])
        for service in services:
            service.version_count = counts.get(service.id, 0)
        return services, total

    async def get_detail(self, db: AsyncSession, service_id: int) -> Service:
        """서비스를 소유 버전과 함께 조회합니다.

        Retrieve one service with all owned versions eagerly loaded.

        Raises:
            RecordNotFoundError: 서비스가 없을 때 (Service does not exist)
        """
        query: Select = (
            select(Service)
            .options(selectinload(Service.versions))
            .where(Service.id == service_id)
        )
        service: Service | None = await self._fetch_one(db, query)
        if service is None:
            raise self._not_found(service_id)

        service.version_count = len(service.versions)
        return service

    async def exists(self, db: AsyncSession, service_id: int) -> bool:
        """서비스 존재 여부를 확인합니다 (Check whether a service exists)."""
        return await self.count(db, id=service_id) > 0

    async def list_versions(self, db: AsyncSession, service_id: int) -> list[Version]:
        """서비스의 버전 목록을 최신순으로 조회합니다.

        List a service's versions, newest first. Returns an empty list for an
        unknown service; the existence check belongs to the caller.
        """
        query: Select = (
            select(Version)
            .where(Version.service_id == service_id)
            .order_by(Version.created_at.desc(), Version.id.desc())
        )
        async with store_errors():
            result = await db.execute(query)
            return list(result.scalars().all())

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> Service:  # type: ignore[override]
        """새 서비스를 생성합니다. 이름 중복은 저장소의 고유 인덱스가 판단합니다.

        Insert a service. Name uniqueness is decided by the store's unique
        index, not by a pre-check.

        Raises:
            ConflictError: 이름 중복 (Duplicate name)
            InvalidError: 필수 필드 누락 (Missing required field)
        """
        service: Service = await super().create(db, obj_data, _NAME_CONFLICT)
        service.version_count = 0
        return service

    async def update(self, db: AsyncSession, service_id: int, update_data: dict[str, Any]) -> Service:
        """서비스를 부분 업데이트합니다.

        Partially update a service by id; only supplied fields change.

        Raises:
            RecordNotFoundError: 서비스가 없을 때 (Service does not exist)
            ConflictError: 다른 서비스가 사용 중인 이름으로 변경 (Rename to a taken name)
        """
        service: Service | None = await self._fetch_one(db, select(Service).where(Service.id == service_id))
        if service is None:
            raise self._not_found(service_id)

        service = await self.apply_update(db, service, update_data, _NAME_CONFLICT)
        counts: dict[int, int] = await self.count_versions(db, [service.id])
        service.version_count = counts.get(service.id, 0)
        return service

    async def delete(self, db: AsyncSession, service_id: int) -> None:
        """서비스와 소유 버전을 함께 삭제합니다.

        Delete all versions owned by the service, then the service itself.
        Both statements run in the caller's transaction scope
        (``transactional``), so either both take effect or neither does.
        Existence is decided by the service DELETE itself: no matched row
        means not found, and the caller's rollback undoes the versions DELETE.

        Raises:
            RecordNotFoundError: 삭제된 서비스 행이 없을 때 (No service row matched)
        """
        async with store_errors():
            await db.execute(delete(Version).where(Version.service_id == service_id))
            result = await db.execute(delete(Service).where(Service.id == service_id))
        if result.rowcount == 0:
            raise self._not_found(service_id)


# 싱글턴 인스턴스 — Singleton instance
service_repository: ServiceRepository = ServiceRepository()
