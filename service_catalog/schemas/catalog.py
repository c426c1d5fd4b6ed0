"""서비스 및 버전 Pydantic 요청/응답 스키마 정의.

Service and Version Pydantic request/response schema definitions,
plus the transient ``ServiceFilter`` used by the list query.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from service_catalog.schemas.common import Pagination


# === 목록 조회 필터 (List filter) ===

class ServiceFilter(BaseModel):
    """서비스 목록 조회 필터.

    Transient query parameters for the service list.
    ``page`` and ``limit`` are expected to be normalized by the caller
    (page >= 1, 1 <= limit <= 100); unknown ``sort``/``order`` values are
    tolerated here and resolved by the repository.

    Attributes:
        name: 이름 부분 일치, 대소문자 무시 (Case-insensitive name substring)
        description: 설명 부분 일치 (Case-insensitive description substring)
        sort: 정렬 컬럼 (name | created_at | updated_at)
        order: 정렬 방향 (asc | desc)
        page: 페이지 번호 (Page number, 1-indexed)
        limit: 페이지 크기 (Page size)
    """

    name: str = ""
    description: str = ""
    sort: str = "name"
    order: str = "asc"
    page: int = 1
    limit: int = 10


# === 서비스 (Service) 스키마 ===

class ServiceCreate(BaseModel):
    """서비스 생성 요청 스키마.

    Attributes:
        name: 서비스 이름, 고유 (Unique service name)
        description: 설명 (Description, optional)
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""


class ServiceUpdate(BaseModel):
    """서비스 수정 요청 스키마 (부분 업데이트).

    Only the fields present in the request body are changed.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class ServiceResponse(BaseModel):
    """서비스 응답 스키마 — 목록 항목.

    Flat service record returned by list endpoints.

    Attributes:
        version_count: 소유 버전 수 (Live count of owned versions)
    """

    id: int
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    version_count: int = 0


class VersionResponse(BaseModel):
    """버전 응답 스키마."""

    id: int
    service_id: int
    version: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ServiceDetailResponse(ServiceResponse):
    """서비스 상세 응답 — 소유 버전 포함 (Service detail with owned versions)."""

    versions: list[VersionResponse] = []


class ServiceListResponse(BaseModel):
    """서비스 목록 응답 스키마.

    Attributes:
        services: 현재 페이지의 서비스 (Services on the current page)
        pagination: 페이지네이션 정보 (Pagination metadata)
    """

    services: list[ServiceResponse]
    pagination: Pagination


# === 버전 (Version) 스키마 ===

class VersionCreate(BaseModel):
    """버전 생성 요청 스키마.

    service_id는 URL 경로 파라미터로 전달됩니다 (service_id comes from the URL path).
    """

    version: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    is_active: bool = True


class VersionUpdate(BaseModel):
    """버전 수정 요청 스키마 (부분 업데이트)."""

    version: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    is_active: bool | None = None
