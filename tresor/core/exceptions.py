"""HTTP-facing exceptions and the error body they render to."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    correlation_id: Optional[str] = None


class BaseAPIException(Exception):
    """Raised from routes; rendered by the registered exception handler.

    Subclasses only pick the status, the TRS code and a default message.
    """

    status_code: int = 500
    code: str = "TRS-500"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_error_response(self, correlation_id: Optional[str] = None) -> ErrorResponse:
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details,
            correlation_id=correlation_id
        )


class ValidationError(BaseAPIException):
    status_code = 400
    code = "TRS-400"
    default_message = "Validation failed"


class AuthenticationError(BaseAPIException):
    # Shared by every refused login, whatever the cause
    status_code = 401
    code = "TRS-401"
    default_message = "Invalid username or password"


class NotFoundError(BaseAPIException):
    status_code = 404
    code = "TRS-404"
    default_message = "Resource not found"


class ConflictError(BaseAPIException):
    status_code = 409
    code = "TRS-409"
    default_message = "Resource conflict"


class ServiceUnavailableError(BaseAPIException):
    status_code = 503
    code = "TRS-503"
    default_message = "Service temporarily unavailable"


class InternalServerError(BaseAPIException):
    pass
