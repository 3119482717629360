"""Authentication-related data transfer objects."""

from dataclasses import dataclass
from typing import Optional

from tresor.application.dto.base import BaseDTO
from tresor.application.dto.user_dto import UserDTO


@dataclass
class LoginRequest(BaseDTO):
    """Request DTO for user login."""
    username: Optional[str]  # The account email
    password: Optional[str]


@dataclass
class LoginResult(BaseDTO):
    """Outcome of a successful login."""
    user: UserDTO
    password_rehashed: bool = False
