import time
from typing import Callable, Dict

from fastapi import Request, Response
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware

from tresor.infrastructure.logging import bind_context, get_logger, unbind_context
from tresor.infrastructure.logging_processors import REDACTED
from tresor.infrastructure.metrics import (http_request_duration_seconds,
                                           http_requests_total)

logger = get_logger(__name__)

SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie", "x-api-key"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """Request/response logging and HTTP metrics.

    Request bodies are never logged; they carry passwords.
    """

    def __init__(self, app):
        super().__init__(app)
        self.exclude_paths = {"/health", "/metrics"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        bind_context(client_ip=self._get_client_ip(request))

        logger.info(
            "http_request_started",
            method=request.method,
            path=request.url.path,
            headers=self._sanitize_headers(request.headers),
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "http_request_failed",
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise
        else:
            duration = time.perf_counter() - start_time
            route = request.scope.get("route")
            path = getattr(route, "path", "unmatched")

            http_requests_total.labels(
                method=request.method, path=path, status=str(response.status_code)
            ).inc()
            http_request_duration_seconds.labels(
                method=request.method, path=path
            ).observe(duration)

            logger.info(
                "http_request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            response.headers["X-Response-Time"] = f"{round(duration * 1000, 2)}ms"
            return response
        finally:
            unbind_context("client_ip")

    def _get_client_ip(self, request: Request) -> str:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        if request.client:
            return request.client.host
        return "unknown"

    def _sanitize_headers(self, headers: Headers) -> Dict[str, str]:
        return {
            key: REDACTED if key.lower() in SENSITIVE_HEADERS else value
            for key, value in headers.items()
        }
