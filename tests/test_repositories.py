"""레포지토리 테스트 — 실제 DB에 대한 쿼리/제약/트랜잭션 동작.

Repository tests against a real database: filtering, counting, scoping,
constraint translation and the atomic cascading delete.
"""

import pytest
from sqlalchemy import Delete, delete
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from service_catalog.models import Service, Version
from service_catalog.repositories.base import RecordNotFoundError
from service_catalog.repositories.service_repository import ServiceRepository, service_repository
from service_catalog.repositories.version_repository import version_repository
from service_catalog.schemas.catalog import ServiceFilter
from service_catalog.services.catalog_service import CatalogService, catalog_service
from service_catalog.utils.exceptions import (
    ConflictError,
    InvalidError,
    ServiceNotFoundError,
    UnavailableError,
)
from service_catalog.utils.store_errors import _violation_kind, store_errors
from tests.conftest import make_service


class TestServiceRepository:
    """서비스 레포지토리 테스트."""

    async def test_count_versions_grouped(self, db: AsyncSession, catalog):
        """버전이 없는 서비스는 결과에서 빠짐."""
        auth_id, billing_id = catalog["auth"].id, catalog["billing"].id
        counts = await service_repository.count_versions(db, [auth_id, billing_id])
        assert counts == {auth_id: 2}

    async def test_count_versions_empty_ids(self, db: AsyncSession):
        assert await service_repository.count_versions(db, []) == {}

    async def test_get_paginated_attaches_counts(self, db: AsyncSession, catalog):
        """목록 항목마다 version_count가 채워짐."""
        services, total = await service_repository.get_paginated(db, ServiceFilter())
        assert total == 2
        assert [(s.name, s.version_count) for s in services] == [("Auth", 2), ("Billing", 0)]

    async def test_get_paginated_total_counts_before_paging(self, db: AsyncSession):
        """전체 개수는 페이지 적용 전 기준."""
        for i in range(7):
            await make_service(db, f"worker-{i}")
        services, total = await service_repository.get_paginated(db, ServiceFilter(page=2, limit=5))
        assert total == 7
        assert [s.name for s in services] == ["worker-5", "worker-6"]

    async def test_get_detail(self, db: AsyncSession, catalog):
        service = await service_repository.get_detail(db, catalog["auth"].id)
        assert service.version_count == 2
        assert [v.version for v in service.versions] == ["1.1.0", "1.0.0"]

    async def test_get_detail_missing(self, db: AsyncSession):
        with pytest.raises(RecordNotFoundError):
            await service_repository.get_detail(db, 424242)

    async def test_list_versions_unknown_service_is_empty(self, db: AsyncSession):
        """존재 확인은 호출자 책임 — 레포지토리는 빈 목록 반환."""
        assert await service_repository.list_versions(db, 424242) == []

    async def test_duplicate_name_conflict(self, db: AsyncSession, catalog):
        """이름 중복은 고유 인덱스가 거부 → ConflictError."""
        with pytest.raises(ConflictError) as exc_info:
            await service_repository.create(db, {"name": "Auth", "description": ""})
        assert exc_info.value.status_code == 409
        await db.rollback()

    async def test_update_missing(self, db: AsyncSession):
        with pytest.raises(RecordNotFoundError):
            await service_repository.update(db, 424242, {"name": "Ghost"})

    async def test_delete_removes_versions(self, db: AsyncSession, catalog):
        service_id = catalog["auth"].id
        await service_repository.delete(db, service_id)
        await db.commit()

        assert not await service_repository.exists(db, service_id)
        assert await service_repository.count_versions(db, [service_id]) == {}
        assert await version_repository.count(db, service_id=service_id) == 0

    async def test_delete_missing(self, db: AsyncSession):
        with pytest.raises(RecordNotFoundError):
            await service_repository.delete(db, 424242)


class TestAtomicDelete:
    """연쇄 삭제의 원자성 테스트."""

    async def test_failure_midway_keeps_all_rows(self, db: AsyncSession, catalog, monkeypatch):
        """서비스 행 삭제 단계에서 실패하면 버전 삭제도 롤백."""
        service_id = catalog["auth"].id
        original_execute = AsyncSession.execute

        async def failing_execute(self, statement, *args, **kwargs):
            if isinstance(statement, Delete) and statement.table.name == "services":
                raise sa_exc.OperationalError("DELETE FROM services", {}, Exception("connection lost"))
            return await original_execute(self, statement, *args, **kwargs)

        monkeypatch.setattr(AsyncSession, "execute", failing_execute)
        with pytest.raises(UnavailableError):
            await catalog_service.delete_service(db, service_id)
        monkeypatch.undo()

        assert await service_repository.exists(db, service_id)
        assert await service_repository.count_versions(db, [service_id]) == {service_id: 2}

    async def test_service_gone_after_delete(self, db: AsyncSession, catalog):
        """삭제 후 조회와 버전 목록 모두 not found."""
        service_id = catalog["auth"].id
        await catalog_service.delete_service(db, service_id)

        with pytest.raises(ServiceNotFoundError):
            await catalog_service.get_service(db, service_id)
        with pytest.raises(ServiceNotFoundError):
            await catalog_service.get_service_versions(db, service_id)

    async def test_concurrent_delete_is_not_found(self, db: AsyncSession, session_factory, catalog):
        """확인 직후 다른 요청이 삭제하면 성공이 아니라 not found."""
        service_id = catalog["auth"].id
        racing = CatalogService(services=_ConcurrentlyDeletedRepository(session_factory))

        with pytest.raises(ServiceNotFoundError):
            await racing.delete_service(db, service_id)
        assert not await service_repository.exists(db, service_id)


class _ConcurrentlyDeletedRepository(ServiceRepository):
    """다른 세션이 같은 서비스를 먼저 삭제하는 상황을 재현."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__()
        self._session_factory = session_factory

    async def delete(self, db: AsyncSession, service_id: int) -> None:
        assert await self.exists(db, service_id)
        async with self._session_factory() as other:
            await other.execute(delete(Version).where(Version.service_id == service_id))
            await other.execute(delete(Service).where(Service.id == service_id))
            await other.commit()
        await super().delete(db, service_id)


class TestVersionRepository:
    """버전 레포지토리 테스트."""

    async def test_create_with_unknown_service(self, db: AsyncSession):
        """FK 위반은 InvalidError(invalid_reference)."""
        with pytest.raises(InvalidError) as exc_info:
            await version_repository.create(db, {"service_id": 424242, "version": "1.0.0"})
        assert exc_info.value.code == "invalid_reference"
        await db.rollback()

    async def test_get_scoped_wrong_service(self, db: AsyncSession, catalog):
        """다른 서비스 ID로는 조회되지 않음."""
        version = (await service_repository.list_versions(db, catalog["auth"].id))[0]
        with pytest.raises(RecordNotFoundError):
            await version_repository.get_scoped(db, version.id, catalog["billing"].id)

    async def test_update_keeps_owner(self, db: AsyncSession, catalog):
        """service_id는 업데이트로 바뀌지 않음."""
        auth_id = catalog["auth"].id
        version = (await service_repository.list_versions(db, auth_id))[0]
        updated = await version_repository.update(
            db, version.id, auth_id, {"service_id": catalog["billing"].id, "description": "patched"}
        )
        assert updated.service_id == auth_id
        assert updated.description == "patched"

    async def test_delete_wrong_service(self, db: AsyncSession, catalog):
        version = (await service_repository.list_versions(db, catalog["auth"].id))[0]
        with pytest.raises(RecordNotFoundError):
            await version_repository.delete(db, version.id, catalog["billing"].id)


class TestStoreErrors:
    """저장소 오류 변환 테스트."""

    class _Orig(Exception):
        def __init__(self, message: str, sqlstate: str | None = None) -> None:
            super().__init__(message)
            self.sqlstate = sqlstate

    def _integrity(self, message: str, sqlstate: str | None = None) -> sa_exc.IntegrityError:
        return sa_exc.IntegrityError("INSERT", {}, self._Orig(message, sqlstate))

    def test_violation_kind_by_sqlstate(self):
        assert _violation_kind(self._integrity("boom", "23505")) == "unique"
        assert _violation_kind(self._integrity("boom", "23503")) == "foreign_key"
        assert _violation_kind(self._integrity("null value in column", "23502")) == "other"

    def test_violation_kind_by_message(self):
        assert _violation_kind(self._integrity("UNIQUE constraint failed: services.name")) == "unique"
        assert _violation_kind(self._integrity("FOREIGN KEY constraint failed")) == "foreign_key"
        assert _violation_kind(self._integrity("NOT NULL constraint failed")) == "other"

    async def test_not_null_is_invalid(self):
        with pytest.raises(InvalidError) as exc_info:
            async with store_errors():
                raise self._integrity("NOT NULL constraint failed: services.name")
        assert exc_info.value.code == "invalid_request"

    async def test_unique_uses_conflict_message(self):
        with pytest.raises(ConflictError) as exc_info:
            async with store_errors("taken"):
                raise self._integrity("duplicate key value", "23505")
        assert exc_info.value.detail == "taken"

    @pytest.mark.parametrize("error", [
        sa_exc.OperationalError("SELECT 1", {}, Exception("could not connect")),
        sa_exc.TimeoutError("QueuePool limit reached"),
        TimeoutError("statement timeout"),
    ])
    async def test_unreachable_store_is_unavailable(self, error):
        with pytest.raises(UnavailableError) as exc_info:
            async with store_errors():
                raise error
        assert exc_info.value.status_code == 503

    async def test_other_errors_propagate(self):
        with pytest.raises(ValueError):
            async with store_errors():
                raise ValueError("not a store error")
