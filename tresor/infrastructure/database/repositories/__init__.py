"""Database repositories module."""
from .user_repository import EmailAlreadyStoredError, UserRepository

__all__ = [
    'EmailAlreadyStoredError',
    'UserRepository',
]
