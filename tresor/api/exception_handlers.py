"""Exception handlers rendering every error as an ErrorResponse body."""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tresor.application.dto.common_dto import ErrorCode, Result
from tresor.core.exceptions import (AuthenticationError, BaseAPIException,
                                    ConflictError, ErrorResponse,
                                    InternalServerError, NotFoundError,
                                    ServiceUnavailableError, ValidationError)
from tresor.infrastructure.middleware.correlation import (CORRELATION_HEADER,
                                                          get_correlation_id)

logger = structlog.get_logger(__name__)

RESULT_EXCEPTIONS = {
    ErrorCode.VALIDATION_ERROR: ValidationError,
    ErrorCode.UNAUTHORIZED: AuthenticationError,
    ErrorCode.NOT_FOUND: NotFoundError,
    ErrorCode.CONFLICT: ConflictError,
    ErrorCode.SERVICE_UNAVAILABLE: ServiceUnavailableError,
}


def raise_for_result(result: Result) -> None:
    """Translate a failed service Result into the matching API exception."""
    if result.success:
        return

    exception_type = RESULT_EXCEPTIONS.get(result.error_code, InternalServerError)
    raise exception_type(
        message=result.error,
        details={"errors": result.errors} if result.errors else None,
    )


def _render(
    status_code: int,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    correlation_id = get_correlation_id()
    body = ErrorResponse(
        code=code,
        message=message,
        details=details,
        correlation_id=correlation_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers={CORRELATION_HEADER: correlation_id} if correlation_id else None,
    )


async def base_api_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "api_exception",
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )
    return _render(exc.status_code, exc.code, exc.message, exc.details)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Only location, message and type; the offending input may be a password
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        "validation_error",
        fields=[error["field"] for error in errors],
        path=request.url.path,
    )
    return _render(400, ValidationError.code, "Request validation failed", {"errors": errors})


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return _render(exc.status_code, f"TRS-{exc.status_code}", str(exc.detail))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_exception",
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return _render(500, InternalServerError.code, "An unexpected error occurred")
