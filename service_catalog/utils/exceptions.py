"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the catalog's error
vocabulary. Each carries a machine-readable ``code`` next to the HTTP status
so the error envelope ``{code, message, details}`` can be rendered uniformly.

Usage:
    from service_catalog.utils.exceptions import ServiceNotFoundError, ConflictError
    raise ServiceNotFoundError()
    raise ConflictError("A service with this name already exists")
"""

from typing import Any

from fastapi import HTTPException, status


class CatalogError(HTTPException):
    """카탈로그 예외의 공통 부모 클래스.

    Base class for catalog errors.

    Args:
        detail: 사람이 읽는 오류 메시지 (Human-readable message)
        code: 기계 판독용 오류 코드 (Machine-readable code, defaults to the class code)
        details: 추가 정보 (Optional detail payload)
    """

    status_code_default: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_server_error"
    message: str = "The server encountered an unexpected error"

    def __init__(
        self,
        detail: str | None = None,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(status_code=self.status_code_default, detail=detail or self.message)
        if code is not None:
            self.code = code
        self.details: Any = details


class NotFoundError(CatalogError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Never retried; the caller answers with a not-found response.
    """

    status_code_default = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Resource not found"


class ServiceNotFoundError(NotFoundError):
    """서비스가 존재하지 않음 (Service does not exist)."""

    code = "service_not_found"
    message = "Service not found"


class VersionNotFoundError(NotFoundError):
    """버전이 없거나 다른 서비스에 속함 (Version missing or owned by another service)."""

    code = "version_not_found"
    message = "Version not found"


class ConflictError(CatalogError):
    """409 Conflict 예외 — 고유 제약 위반 시 사용.

    Raised when the store rejects a write on a uniqueness constraint
    (e.g. duplicate service name).
    """

    status_code_default = status.HTTP_409_CONFLICT
    code = "conflict"
    message = "Resource already exists"


class InvalidError(CatalogError):
    """400 Bad Request 예외 — 필수 필드 누락 또는 참조 무결성 위반.

    Raised when required fields are missing or malformed below the HTTP layer,
    e.g. a foreign key or not-null violation reported by the store.
    """

    status_code_default = status.HTTP_400_BAD_REQUEST
    code = "invalid_request"
    message = "Invalid request"


class UnavailableError(CatalogError):
    """503 Service Unavailable 예외 — 저장소 연결 불가 또는 타임아웃.

    Transient/systemic failure; the only kind a caller may reasonably retry.
    """

    status_code_default = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "store_unavailable"
    message = "The data store is unavailable"
