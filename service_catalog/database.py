"""데이터베이스 엔진, 세션 및 트랜잭션 범위 모듈.

Database engine, session and transaction scope module.
The store handle is an explicit ``Database`` object rather than a module-level
engine: it is created at application startup, stored on ``app.state`` and
disposed at shutdown (init → configure pool → serve → close).
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from service_catalog.config import Settings
from service_catalog.utils.store_errors import store_errors


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    All models inherit from this class to register with the metadata.
    """

    pass


def _engine_options(settings: Settings) -> dict[str, Any]:
    """드라이버별 엔진 옵션을 구성합니다.

    Build engine keyword arguments for the configured driver.
    Pool bounds apply to every server database; asyncpg additionally receives
    the per-statement timeout and has its prepared statement cache disabled
    for transaction-mode poolers.
    """
    url = make_url(settings.DATABASE_URL)
    options: dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        return options

    options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )
    if url.get_driver_name() == "asyncpg":
        options["connect_args"] = {
            "statement_cache_size": 0,
            "command_timeout": settings.DB_COMMAND_TIMEOUT,
        }
    return options


class Database:
    """엔진과 세션 팩토리를 묶은 저장소 핸들.

    Store handle bundling the async engine and its session factory.

    Attributes:
        engine: 비동기 데이터베이스 엔진 (Async database engine, bounded pool)
        session_factory: 비동기 세션 팩토리 (Async session factory)
    """

    def __init__(self, settings: Settings) -> None:
        self.engine: AsyncEngine = create_async_engine(
            settings.DATABASE_URL, **_engine_options(settings)
        )
        # expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """연결을 하나 꺼내 ``SELECT 1``로 확인합니다 (Verify connectivity)."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """ORM 메타데이터로 테이블을 생성합니다 (Create all tables from ORM metadata)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """커넥션 풀을 정리합니다 (Dispose the connection pool)."""
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session from the
    ``Database`` handle on ``app.state``. The session is closed after the
    request completes, which rolls back anything left uncommitted and returns
    the connection to the pool.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transactional(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """하나의 트랜잭션 범위 — 모두 성공 시 커밋, 실패 시 전체 롤백.

    Single transaction scope for a multi-statement mutation.
    Commits only after the block completes; any exception, including task
    cancellation, rolls back every statement issued inside the block.
    A commit that fails on the store is translated like any other store call.

    Usage:
        async with transactional(db):
            await service_repository.delete(db, service_id)
    """
    try:
        yield db
        async with store_errors():
            await db.commit()
    except BaseException:
        await db.rollback()
        raise
