"""카탈로그 서비스 — 서비스/버전 비즈니스 로직.

Catalog Service — Business logic for services and their versions.
Thin orchestration above the repositories:
    - 부모 존재 확인 (Parent existence checks before listing/creating versions)
    - 저장소 not-found → 도메인 not-found 변환
      (Storage-level not-found becomes a domain-level not-found)
    - 페이지네이션 메타데이터 구성 (Pagination metadata assembly)
    - 변경 작업마다 하나의 트랜잭션 범위 (One transaction scope per mutation)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.database import transactional
from service_catalog.models.catalog import Service, Version
from service_catalog.repositories.base import RecordNotFoundError
from service_catalog.repositories.interfaces import ServiceRepositoryProtocol, VersionRepositoryProtocol
from service_catalog.repositories.service_repository import service_repository
from service_catalog.repositories.version_repository import version_repository
from service_catalog.schemas.catalog import (
    ServiceCreate,
    ServiceDetailResponse,
    ServiceFilter,
    ServiceListResponse,
    ServiceResponse,
    ServiceUpdate,
    VersionCreate,
    VersionResponse,
    VersionUpdate,
)
from service_catalog.utils.exceptions import ServiceNotFoundError, VersionNotFoundError
from service_catalog.utils.pagination import build_pagination

logger = logging.getLogger(__name__)


class CatalogService:
    """서비스 카탈로그 비즈니스 로직을 처리하는 서비스.

    Service handling catalog business logic. Repositories are injected so
    any implementation of the repository protocols can stand in for the
    database.

    Attributes:
        services: 서비스 레포지토리 (Service repository)
        versions: 버전 레포지토리 (Version repository)
    """

    def __init__(
        self,
        services: ServiceRepositoryProtocol = service_repository,
        versions: VersionRepositoryProtocol = version_repository,
    ) -> None:
        self.services: ServiceRepositoryProtocol = services
        self.versions: VersionRepositoryProtocol = versions

    # ------------------------------------------------------------------
    # 응답 변환 — Response conversion
    # ------------------------------------------------------------------

    def _to_response(self, service: Service) -> ServiceResponse:
        """서비스 모델을 목록 응답 스키마로 변환합니다 (Service → ServiceResponse)."""
        return ServiceResponse(
            id=service.id,
            name=service.name,
            description=service.description,
            created_at=service.created_at,
            updated_at=service.updated_at,
            version_count=service.version_count,
        )

    def _to_version_response(self, version: Version) -> VersionResponse:
        """버전 모델을 응답 스키마로 변환합니다 (Version → VersionResponse)."""
        return VersionResponse(
            id=version.id,
            service_id=version.service_id,
            version=version.version,
            description=version.description,
            is_active=version.is_active,
            created_at=version.created_at,
            updated_at=version.updated_at,
        )

    async def _require_service(self, db: AsyncSession, service_id: int) -> None:
        if not await self.services.exists(db, service_id):
            raise ServiceNotFoundError()

    # ------------------------------------------------------------------
    # 서비스 — Services
    # ------------------------------------------------------------------

    async def list_services(
        self,
        db: AsyncSession,
        service_filter: ServiceFilter,
    ) -> ServiceListResponse:
        """서비스 목록과 페이지네이션 정보를 조회합니다.

        List services for the filter and assemble pagination metadata with
        ``total_pages = ceil(total / limit)``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            service_filter: 정규화된 목록 필터 (Normalized list filter)

        Returns:
            ServiceListResponse: 서비스 목록 + 페이지네이션 (Services and pagination)
        """
        services, total = await self.services.get_paginated(db, service_filter)
        return ServiceListResponse(
            services=[self._to_response(s) for s in services],
            pagination=build_pagination(service_filter.page, service_filter.limit, total),
        )

    async def get_service(self, db: AsyncSession, service_id: int) -> ServiceDetailResponse:
        """서비스 상세 정보를 버전과 함께 조회합니다.

        Raises:
            ServiceNotFoundError: 서비스를 찾을 수 없을 때 (Service not found)
        """
        try:
            service: Service = await self.services.get_detail(db, service_id)
        except RecordNotFoundError as exc:
            raise ServiceNotFoundError() from exc

        return ServiceDetailResponse(
            **self._to_response(service).model_dump(),
            versions=[self._to_version_response(v) for v in service.versions],
        )

    async def create_service(self, db: AsyncSession, data: ServiceCreate) -> ServiceResponse:
        """새 서비스를 생성합니다.

        Raises:
            ConflictError: 같은 이름의 서비스가 이미 존재할 때 (Duplicate name)
        """
        async with transactional(db):
            service: Service = await self.services.create(db, data.model_dump())
        logger.info("Created service %s (%s)", service.id, service.name)
        return self._to_response(service)

    async def update_service(
        self,
        db: AsyncSession,
        service_id: int,
        data: ServiceUpdate,
    ) -> ServiceResponse:
        """서비스 정보를 부분 수정합니다.

        Raises:
            ServiceNotFoundError: 서비스를 찾을 수 없을 때 (Service not found)
            ConflictError: 다른 서비스가 사용 중인 이름 (Name taken by another service)
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        try:
            async with transactional(db):
                service: Service = await self.services.update(db, service_id, update_data)
        except RecordNotFoundError as exc:
            raise ServiceNotFoundError() from exc
        return self._to_response(service)

    async def delete_service(self, db: AsyncSession, service_id: int) -> None:
        """서비스와 모든 소유 버전을 하나의 트랜잭션으로 삭제합니다.

        Delete a service and every version it owns in one transaction;
        a failure part-way through leaves all rows untouched.

        Raises:
            ServiceNotFoundError: 서비스를 찾을 수 없을 때 (Service not found)
        """
        try:
            async with transactional(db):
                await self.services.delete(db, service_id)
        except RecordNotFoundError as exc:
            raise ServiceNotFoundError() from exc
        logger.info("Deleted service %s with its versions", service_id)

    # ------------------------------------------------------------------
    # 버전 — Versions
    # ------------------------------------------------------------------

    async def get_service_versions(self, db: AsyncSession, service_id: int) -> list[VersionResponse]:
        """서비스의 버전 목록을 최신순으로 조회합니다.

        The service must exist: a missing service is reported as not found
        rather than as an empty list.

        Raises:
            ServiceNotFoundError: 서비스를 찾을 수 없을 때 (Service not found)
        """
        await self._require_service(db, service_id)
        versions: list[Version] = await self.services.list_versions(db, service_id)
        return [self._to_version_response(v) for v in versions]

    async def get_service_version(
        self,
        db: AsyncSession,
        service_id: int,
        version_id: int,
    ) -> VersionResponse:
        """서비스 범위에서 단일 버전을 조회합니다.

        Raises:
            VersionNotFoundError: 버전이 없거나 다른 서비스 소속일 때
                                  (Missing, or owned by another service)
        """
        try:
            version: Version = await self.versions.get_scoped(db, version_id, service_id)
        except RecordNotFoundError as exc:
            raise VersionNotFoundError() from exc
        return self._to_version_response(version)

    get_version = get_service_version

    async def create_version(
        self,
        db: AsyncSession,
        service_id: int,
        data: VersionCreate,
    ) -> VersionResponse:
        """서비스에 새 버전을 생성합니다.

        The owning service is checked first; the foreign key constraint
        remains the backstop for a service deleted concurrently.

        Raises:
            ServiceNotFoundError: 소유 서비스가 없을 때 (Owning service not found)
            InvalidError: 저장소가 참조 무결성 위반으로 거부할 때
                          (Store rejected the reference)
        """
        async with transactional(db):
            await self._require_service(db, service_id)
            version: Version = await self.versions.create(
                db, {**data.model_dump(), "service_id": service_id}
            )
        return self._to_version_response(version)

    async def update_version(
        self,
        db: AsyncSession,
        service_id: int,
        version_id: int,
        data: VersionUpdate,
    ) -> VersionResponse:
        """버전을 부분 수정합니다.

        Raises:
            VersionNotFoundError: 일치하는 버전이 없을 때 (No matching version)
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        try:
            async with transactional(db):
                version: Version = await self.versions.update(db, version_id, service_id, update_data)
        except RecordNotFoundError as exc:
            raise VersionNotFoundError() from exc
        return self._to_version_response(version)

    async def delete_version(self, db: AsyncSession, service_id: int, version_id: int) -> None:
        """버전을 삭제합니다.

        Raises:
            VersionNotFoundError: 일치하는 버전이 없을 때 (No matching version)
        """
        try:
            async with transactional(db):
                await self.versions.delete(db, version_id, service_id)
        except RecordNotFoundError as exc:
            raise VersionNotFoundError() from exc


# 싱글턴 인스턴스 — Singleton instance
catalog_service: CatalogService = CatalogService()
