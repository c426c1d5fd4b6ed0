"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per catalog request to Axiom: method, path,
query/path params, request body, status code, duration and the error
envelope's code/message for failed requests. Sensitive keys are masked.
Without an Axiom token the middleware is a pass-through.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from service_catalog.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# 마스킹 대상 키 — Keys masked in logged payloads
_SENSITIVE_KEYS = re.compile(r"(password|secret|token|authorization|api_key|credential)", re.IGNORECASE)

_MAX_BODY_CHARS: int = 2000
_MAX_ERROR_CHARS: int = 500


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 키를 재귀적으로 마스킹 (Recursively mask sensitive keys)."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask(v, depth + 1) for k, v in data.items()}
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > _MAX_BODY_CHARS:
        return data[:_MAX_BODY_CHARS] + "...(truncated)"
    return data


def _parse_json(raw: bytes) -> Any:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs API requests and responses to Axiom.
    """

    def __init__(self, app: Any, settings: Settings = default_settings) -> None:
        super().__init__(app)
        self._dataset: str = settings.AXIOM_DATASET
        self._client: AxiomClient | None = None
        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def _read_error(self, response: Response) -> tuple[Response, Any]:
        """오류 응답 본문을 읽고 다시 감싸서 반환 (Consume and re-wrap an error body)."""
        body = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

        payload = _parse_json(body)
        if isinstance(payload, dict):
            error: Any = {"code": payload.get("code"), "message": payload.get("message")}
        else:
            error = body.decode("utf-8", errors="replace")[:_MAX_ERROR_CHARS]

        rewrapped = Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )
        return rewrapped, error

    def _ingest(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:  # noqa: BLE001
            logger.warning("Failed to ship request log to Axiom", exc_info=True)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None:
            return await call_next(request)

        started = time.perf_counter()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path}
        if request.query_params:
            event["query_params"] = _mask(dict(request.query_params))
        if request.method in ("POST", "PUT", "PATCH"):
            body = _parse_json(await request.body())
            if body is not None:
                event["request_body"] = _mask(body)

        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            if status_code >= 400:
                response, event["error"] = await self._read_error(response)
            return response
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            if request.path_params:
                event["path_params"] = dict(request.path_params)
            event["status_code"] = status_code
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._ingest(event)
