"""Result types returned by the application services.

Services never raise for expected outcomes such as a weak password or an
unknown email; they return a failed Result and the API layer maps its
ErrorCode to a status code.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Optional, List
from enum import Enum

from tresor.core.auth.auth_types import ValidationResult

T = TypeVar('T')

MAX_PAGE_SIZE = 100


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


@dataclass
class Result(Generic[T]):
    """Outcome of one service call.

    Attributes:
        success: Whether the operation completed
        value: Payload of a successful call
        error: Message safe to show to the client
        error_code: Category of the failure
        errors: Individual messages, e.g. every password rule that failed
    """
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        errors: Optional[List[str]] = None
    ) -> "Result[T]":
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=list(errors) if errors else []
        )

    @classmethod
    def from_validation(cls, validation: ValidationResult) -> "Result[T]":
        """Failed Result carrying every policy violation."""
        return cls.fail(
            "Password validation failed",
            ErrorCode.VALIDATION_ERROR,
            validation.errors
        )

    def cast(self) -> "Result":
        """Re-type a failure so it can be returned from another operation."""
        if self.success:
            raise ValueError("Only failed results can be cast")
        return Result.fail(self.error, self.error_code, self.errors)


@dataclass
class PagedResult(Generic[T]):
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def pages(self) -> int:
        """Number of pages; an empty store still has one (empty) page."""
        return max(1, -(-self.total // self.per_page))


@dataclass
class PaginationParams:
    """1-based page number and page size, clamped to 1..MAX_PAGE_SIZE."""
    page: int = 1
    per_page: int = 20

    def __post_init__(self):
        self.page = max(1, self.page)
        self.per_page = min(max(1, self.per_page), MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page
