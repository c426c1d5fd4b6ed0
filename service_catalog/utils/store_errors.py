"""저장소 오류 변환 모듈.

Store error translation shared by the repositories and the transaction
scope:
    - 고유 제약 위반 → ConflictError (Unique violation → ConflictError)
    - 기타 무결성 위반 → InvalidError (FK / not-null violation → InvalidError)
    - 연결 실패/타임아웃 → UnavailableError (Unreachable store or timeout)
    - 그 외 오류는 그대로 전파 (Everything else propagates unchanged)
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import exc as sa_exc

from service_catalog.utils.exceptions import ConflictError, InvalidError, UnavailableError

# PostgreSQL SQLSTATE — unique_violation, foreign_key_violation
_UNIQUE_VIOLATION: str = "23505"
_FOREIGN_KEY_VIOLATION: str = "23503"


def _violation_kind(error: sa_exc.IntegrityError) -> str:
    """무결성 오류의 종류를 판별합니다: "unique", "foreign_key" 또는 "other".

    Classify an integrity error by SQLSTATE when the driver reports one,
    otherwise by the driver message (SQLite).
    """
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(orig).lower()
    if sqlstate == _UNIQUE_VIOLATION or (sqlstate is None and ("unique" in message or "duplicate" in message)):
        return "unique"
    if sqlstate == _FOREIGN_KEY_VIOLATION or (sqlstate is None and "foreign key" in message):
        return "foreign_key"
    return "other"


@asynccontextmanager
async def store_errors(conflict_message: str = "Resource already exists") -> AsyncIterator[None]:
    """저장소 예외를 카탈로그 오류 종류로 변환합니다.

    Translate known store failures into catalog error kinds.

    Args:
        conflict_message: 고유 제약 위반 시 메시지 (Message used for ConflictError)
    """
    try:
        yield
    except sa_exc.IntegrityError as exc:
        kind = _violation_kind(exc)
        if kind == "unique":
            raise ConflictError(conflict_message, details=str(exc.orig)) from exc
        if kind == "foreign_key":
            raise InvalidError(
                "The referenced record does not exist",
                code="invalid_reference",
                details=str(exc.orig),
            ) from exc
        raise InvalidError("Required field missing or malformed", details=str(exc.orig)) from exc
    except (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError, TimeoutError) as exc:
        raise UnavailableError(details=f"{type(exc).__name__}: {exc}") from exc
