"""Application Data Transfer Objects.

This module contains DTOs used for data transfer between layers.
"""

from tresor.application.dto.base import BaseDTO
from tresor.application.dto.common_dto import (
    Result,
    PagedResult,
    PaginationParams,
    ErrorCode
)
from tresor.application.dto.user_dto import (
    RegisterUserRequest,
    UpdateUserRequest,
    ChangePasswordRequest,
    UserDTO,
)
from tresor.application.dto.auth_dto import LoginRequest, LoginResult

__all__ = [
    "BaseDTO",
    "Result",
    "PagedResult",
    "PaginationParams",
    "ErrorCode",
    "RegisterUserRequest",
    "UpdateUserRequest",
    "ChangePasswordRequest",
    "UserDTO",
    "LoginRequest",
    "LoginResult",
]
