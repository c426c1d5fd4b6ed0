"""레포지토리 인터페이스 — 카탈로그 서비스가 의존하는 기능 집합.

Repository interfaces — the capability sets the catalog service depends on.
Any object with these methods can replace the database-backed repositories,
e.g. an in-memory double in unit tests.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.models.catalog import Service, Version
from service_catalog.schemas.catalog import ServiceFilter


class ServiceRepositoryProtocol(Protocol):
    """서비스 레포지토리 기능 집합 (Service repository capabilities)."""

    async def get_paginated(self, db: AsyncSession, service_filter: ServiceFilter) -> tuple[list[Service], int]:
        ...

    async def get_detail(self, db: AsyncSession, service_id: int) -> Service:
        ...

    async def exists(self, db: AsyncSession, service_id: int) -> bool:
        ...

    async def list_versions(self, db: AsyncSession, service_id: int) -> list[Version]:
        ...

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> Service:
        ...

    async def update(self, db: AsyncSession, service_id: int, update_data: dict[str, Any]) -> Service:
        ...

    async def delete(self, db: AsyncSession, service_id: int) -> None:
        ...


class VersionRepositoryProtocol(Protocol):
    """버전 레포지토리 기능 집합 (Version repository capabilities)."""

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> Version:
        ...

    async def get_scoped(self, db: AsyncSession, version_id: int, service_id: int) -> Version:
        ...

    async def update(
        self,
        db: AsyncSession,
        version_id: int,
        service_id: int,
        update_data: dict[str, Any],
    ) -> Version:
        ...

    async def delete(self, db: AsyncSession, version_id: int, service_id: int) -> None:
        ...
