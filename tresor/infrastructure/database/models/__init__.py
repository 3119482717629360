"""Database models module."""
from .base import Base, TimestampedModel, UUIDModel
from .user import UserModel

__all__ = [
    'Base',
    'TimestampedModel',
    'UUIDModel',
    'UserModel',
]
