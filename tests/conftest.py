"""테스트 인프라 — 테스트 DB 엔진, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Test database engine, session, and httpx client fixtures.
TEST_DATABASE_URL selects the database (e.g. a PostgreSQL URL with asyncpg);
by default a temporary SQLite file is used through aiosqlite with foreign
keys enabled. Data is cleared after each test.
"""

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from service_catalog.database import Base, get_db
from service_catalog.main import app
from service_catalog.models import *  # noqa: F401,F403 — register all models with metadata
from service_catalog.models import Service, Version


# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def database_url(tmp_path_factory) -> str:
    """테스트 DB URL — 환경 변수가 없으면 임시 SQLite 파일."""
    url = os.environ.get("TEST_DATABASE_URL")
    if url:
        return url
    path = tmp_path_factory.mktemp("db") / "test_catalog.db"
    return f"sqlite+aiosqlite:///{path}"


def _enable_sqlite_foreign_keys(eng: AsyncEngine) -> None:
    """SQLite는 연결마다 FK 검사를 켜야 합니다."""

    @event.listens_for(eng.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(database_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마가 없으면 생성합니다."""
    eng = create_async_engine(database_url, echo=False)
    if eng.dialect.name == "sqlite":
        _enable_sqlite_foreign_keys(eng)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    async with session_factory() as session:
        yield session
        try:
            await session.commit()
        except Exception:
            await session.rollback()

    # 테스트 후 모든 데이터 정리 (자식 테이블부터)
    async with session_factory() as cleanup:
        for table in reversed(Base.metadata.sorted_tables):
            await cleanup.execute(table.delete())
        await cleanup.commit()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_service(db: AsyncSession, name: str, description: str = "", versions: int = 0) -> Service:
    """서비스와 버전 N개를 생성하고 커밋합니다."""
    service = Service(name=name, description=description)
    db.add(service)
    await db.flush()
    for i in range(versions):
        db.add(Version(service_id=service.id, version=f"1.{i}.0", description=f"{name} release {i}"))
    await db.commit()
    return service


@pytest_asyncio.fixture
async def catalog(db: AsyncSession) -> dict[str, Service]:
    """Auth(버전 2개), Billing(버전 0개) 서비스를 생성합니다."""
    auth = await make_service(db, "Auth", "Authentication and sessions", versions=2)
    billing = await make_service(db, "Billing", "Invoices and payments")
    return {"auth": auth, "billing": billing}
