"""User request/response models."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _normalize_email(value: Optional[str]) -> Optional[str]:
    return value.strip().lower() if value is not None else None


class CreateUserRequest(BaseModel):
    """Registration request model."""
    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    email: EmailStr = Field(..., description="Email address, used as login")
    # Strength rules are applied by the password policy, not here
    password: str = Field(..., description="Password")
    password_confirmation: str = Field(..., description="Password repeated")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "password": "Analyt1cal!",
                "password_confirmation": "Analyt1cal!"
            }
        }
    )


class UpdateUserRequest(BaseModel):
    """Profile update request model."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class ChangePasswordRequest(BaseModel):
    """Password change request model."""
    current_password: str = Field(..., min_length=1)
    new_password: str
    new_password_confirmation: str


class EmailAddressRequest(BaseModel):
    """Lookup by email request model."""
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class UserResponse(BaseModel):
    """User response model. Never contains the password hash."""
    id: UUID
    first_name: str
    last_name: str
    email: str
    created_at: datetime
    updated_at: datetime


class CreateUserResponse(BaseModel):
    message: str = "User created successfully"
    user: UserResponse


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    per_page: int
    pages: int


class UserIdResponse(BaseModel):
    answer: UUID = Field(..., description="ID of the user owning the email")
