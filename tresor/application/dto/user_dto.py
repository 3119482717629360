"""User-related data transfer objects.

This module defines DTOs for user-related operations including registration,
profile management and password changes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Any
from uuid import UUID

from tresor.application.dto.base import BaseDTO


@dataclass
class RegisterUserRequest(BaseDTO):
    """Request DTO for user registration."""
    first_name: str
    last_name: str
    email: str
    password: str
    password_confirmation: str


@dataclass
class UpdateUserRequest(BaseDTO):
    """Request DTO for updating user profile fields."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


@dataclass
class ChangePasswordRequest(BaseDTO):
    """Request DTO for changing user password."""
    current_password: str
    new_password: str
    new_password_confirmation: str


@dataclass
class UserDTO(BaseDTO):
    """User data transfer object.
    
    Represents user information without the stored password hash.
    """
    id: UUID
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime
    
    @classmethod
    def from_model(cls, model: Any) -> "UserDTO":
        """Create UserDTO from database model."""
        return cls(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
