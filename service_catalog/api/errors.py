"""예외 핸들러 — 모든 실패를 표준 오류 응답으로 변환.

Exception handlers — render every failure as the standard error envelope
``{"code", "message", "details"}``:
    - CatalogError 계열 → 각 클래스의 상태 코드 (Status code carried by the error)
    - 요청 검증/파싱 실패 → 400 (Request validation or parse failure)
    - 그 외 → 500 (Anything else, logged with traceback)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from service_catalog.schemas.common import ErrorResponse
from service_catalog.utils.exceptions import CatalogError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str, details: object = None) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, details=jsonable_encoder(details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """카탈로그 예외 응답 (Catalog error → its own status and code)."""
    return _error_response(exc.status_code, exc.code, str(exc.detail), exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 검증 실패는 400으로 응답 (Validation and parse failures answer 400)."""
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "invalid_request",
        "The request could not be validated",
        exc.errors(),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 예외는 로그 후 500으로 응답 (Log and answer 500)."""
    logger.exception("Error processing %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_server_error",
        "The server encountered an unexpected error while processing your request",
        f"{type(exc).__name__}: {exc}",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 예외 핸들러를 등록합니다 (Register all handlers on the app)."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
