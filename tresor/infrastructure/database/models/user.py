"""User database model."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import UUIDModel


class UserModel(UUIDModel):
    """User database model."""
    __tablename__ = "users"
    
    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )
    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True
    )
    # bcrypt output is 60 characters
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
