"""FastAPI 애플리케이션 엔트리포인트 — 수명 주기, 미들웨어 및 라우터 등록.

FastAPI application entry point — Lifespan, middleware and router registration.
The database handle is created at startup, stored on ``app.state`` and
closed at shutdown; nothing touches the store at import time.

Run:
    uvicorn service_catalog.main:app
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from service_catalog.api.errors import register_exception_handlers
from service_catalog.api.v1 import v1_router
from service_catalog.config import Settings, settings as default_settings
from service_catalog.database import Database
from service_catalog.middleware.axiom_logging import AxiomLoggingMiddleware
from service_catalog.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings = default_settings) -> FastAPI:
    """애플리케이션을 구성합니다.

    Build the FastAPI application. API documentation routes are disabled.

    Args:
        settings: 애플리케이션 설정 (Application settings)

    Returns:
        FastAPI: 구성된 애플리케이션 (Configured application)
    """
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # init → configure pool → serve → close
        database = Database(settings)
        await database.ping()
        app.state.database = database
        logger.info("Connected to database, pool size %s", settings.DB_POOL_SIZE)
        try:
            yield
        finally:
            await database.close()
            logger.info("Database connections closed")

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    # Axiom API 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
    # (Registered before CORS to capture all requests)
    app.add_middleware(AxiomLoggingMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")
    return app


app: FastAPI = create_app()
