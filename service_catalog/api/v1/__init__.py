"""v1 API 라우터 패키지 — 모든 v1 엔드포인트 통합.

v1 API Router package — Aggregates the catalog endpoints into a single
router for inclusion in the FastAPI application.

Included routers:
    - services: 서비스 목록/CRUD (Service listing and CRUD)
    - versions: 서비스 하위 버전 CRUD (Versions nested under services)
"""

from fastapi import APIRouter

from service_catalog.api.v1.services import router as services_router
from service_catalog.api.v1.versions import router as versions_router

v1_router: APIRouter = APIRouter()

v1_router.include_router(services_router, prefix="/services", tags=["Services"])
v1_router.include_router(versions_router, tags=["Versions"])
