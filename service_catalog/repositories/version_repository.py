"""버전 레포지토리 — 소유 서비스 범위의 버전 CRUD.

Version Repository — CRUD for versions, every lookup scoped by
``(id, service_id)`` so a version id alone never resolves across services.
"""

from typing import Any

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.models.catalog import Version
from service_catalog.repositories.base import BaseRepository
from service_catalog.utils.store_errors import store_errors


class VersionRepository(BaseRepository[Version]):
    """버전 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the versions table.
    ``create`` does not check that the owning service exists; the caller
    does, and the foreign key constraint rejects anything that slips through.
    """

    def __init__(self) -> None:
        super().__init__(Version)

    def _scoped(self, version_id: int, service_id: int) -> Select:
        return select(Version).where(Version.id == version_id, Version.service_id == service_id)

    async def get_scoped(
        self,
        db: AsyncSession,
        version_id: int,
        service_id: int,
    ) -> Version:
        """소유 서비스 범위에서 버전을 조회합니다.

        Retrieve a version scoped to its owning service.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            version_id: 버전 ID (Version id)
            service_id: 소유 서비스 ID (Owning service id)

        Returns:
            Version: 조회된 버전 (The version)

        Raises:
            RecordNotFoundError: 버전이 없거나 다른 서비스 소속일 때
                                 (Missing, or owned by a different service)
        """
        version: Version | None = await self._fetch_one(db, self._scoped(version_id, service_id))
        if version is None:
            raise self._not_found(version_id)
        return version

    async def update(
        self,
        db: AsyncSession,
        version_id: int,
        service_id: int,
        update_data: dict[str, Any],
    ) -> Version:
        """버전을 부분 업데이트합니다.

        Partially update a version scoped by ``(id, service_id)``.
        ``service_id`` itself is never reassigned.

        Raises:
            RecordNotFoundError: 일치하는 버전이 없을 때 (No matching row)
        """
        version: Version = await self.get_scoped(db, version_id, service_id)
        update_data.pop("service_id", None)
        return await self.apply_update(db, version, update_data)

    async def delete(self, db: AsyncSession, version_id: int, service_id: int) -> None:
        """소유 서비스 범위에서 버전을 삭제합니다.

        Delete a version scoped by ``(id, service_id)``.

        Raises:
            RecordNotFoundError: 삭제된 행이 없을 때 (No row matched)
        """
        async with store_errors():
            result = await db.execute(
                delete(Version).where(Version.id == version_id, Version.service_id == service_id)
            )
        if result.rowcount == 0:
            raise self._not_found(version_id)


# 싱글턴 인스턴스 — Singleton instance
version_repository: VersionRepository = VersionRepository()
