"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic Create, Read, Update operations plus the translation of
store errors into the catalog's error vocabulary.

Error policy:
    - 레코드 없음 → RecordNotFoundError (저장소 어휘, 서비스 계층에서 변환)
      (Missing record → RecordNotFoundError, translated by the service layer)
    - 고유 제약 위반 → ConflictError (Unique violation → ConflictError)
    - 기타 무결성 위반 → InvalidError (FK / not-null violation → InvalidError)
    - 연결 실패/타임아웃 → UnavailableError (Unreachable store or timeout)
    - 그 외 오류는 그대로 전파 (Everything else propagates unchanged)
    (translation lives in ``service_catalog.utils.store_errors``)

Usage:
    class VersionRepository(BaseRepository[Version]):
        def __init__(self) -> None:
            super().__init__(Version)
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from service_catalog.database import Base
from service_catalog.utils.store_errors import store_errors

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class RecordNotFoundError(Exception):
    """저장소 수준의 레코드 없음 — 서비스 계층에서 도메인 예외로 변환됩니다.

    Storage-level not-found signal. Never reaches the HTTP layer directly;
    the catalog service converts it into a domain not-found error.
    """

    def __init__(self, model: str, record_id: Any) -> None:
        super().__init__(f"{model} {record_id} not found")
        self.model: str = model
        self.record_id: Any = record_id


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    def _not_found(self, record_id: Any) -> RecordNotFoundError:
        return RecordNotFoundError(self.model.__name__, record_id)

    async def _fetch_one(self, db: AsyncSession, query: Select) -> ModelType | None:
        """단일 레코드 조회 — 세션에 남은 상태 대신 최신 행을 반영합니다.

        Execute a single-row query, repopulating objects already present in
        the session's identity map so callers always see the current row.
        """
        async with store_errors():
            result = await db.execute(query.execution_options(populate_existing=True))
            return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
        conflict_message: str = "Resource already exists",
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)
            conflict_message: 고유 제약 위반 시 메시지 (Message for ConflictError)

        Returns:
            ModelType: 생성된 레코드 (The created record)

        Raises:
            ConflictError: 고유 제약 위반 (Unique constraint violated)
            InvalidError: 필수 필드 누락 또는 참조 무결성 위반
                          (Missing required field or broken reference)
        """
        db_obj: ModelType = self.model(**obj_data)
        async with store_errors(conflict_message):
            db.add(db_obj)
            await db.flush()
            await db.refresh(db_obj)
        return db_obj

    async def apply_update(
        self,
        db: AsyncSession,
        db_obj: ModelType,
        update_data: dict[str, Any],
        conflict_message: str = "Resource already exists",
    ) -> ModelType:
        """조회된 레코드에 부분 업데이트를 적용합니다.

        Apply a partial update to an already-loaded record.
        Only keys present in ``update_data`` change (Pydantic exclude_unset).

        Returns:
            ModelType: 업데이트된 레코드 (Updated record)
        """
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        async with store_errors(conflict_message):
            await db.flush()
            await db.refresh(db_obj)
        return db_obj

    async def count(self, db: AsyncSession, **filters: Any) -> int:
        """조건에 일치하는 레코드 수를 반환합니다.

        Count records matching equality filters.
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)

        async with store_errors():
            return (await db.execute(query)).scalar() or 0
