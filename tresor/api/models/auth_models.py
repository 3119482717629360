"""Authentication request/response models."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    """Login request model.

    Both fields may be missing; the authenticator rejects absent credentials
    with the same response as a wrong password.
    """
    username: Optional[str] = Field(None, description="Account email")
    password: Optional[str] = Field(None, description="Password")

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().lower() if value is not None else None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "ada@example.com",
                "password": "Analyt1cal!"
            }
        }
    )


class LoginResponse(BaseModel):
    """Login response model."""
    message: str
    success: bool
    user_id: Optional[UUID] = None


class PasswordCheckRequest(BaseModel):
    password: Optional[str] = None


class PasswordCheckResponse(BaseModel):
    is_valid: bool
    errors: List[str]
