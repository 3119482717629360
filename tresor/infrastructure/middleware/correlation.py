import re
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from tresor.infrastructure.logging import bind_context, unbind_context

CORRELATION_HEADER = "X-Correlation-ID"

# Client-supplied ids end up in logs and headers; anything else is replaced
VALID_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)


def resolve_correlation_id(header_value: Optional[str]) -> str:
    if header_value and VALID_CORRELATION_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Tags the request, its log lines and its response with one id"""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))

        token = correlation_id_var.set(correlation_id)
        bind_context(
            correlation_id=correlation_id,
            request_method=request.method,
            request_path=request.url.path,
        )
        try:
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            unbind_context("correlation_id", "request_method", "request_path")
            correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()
