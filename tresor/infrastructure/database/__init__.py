"""Database infrastructure module."""
from .connection import DatabaseConnection
from .unit_of_work import UnitOfWork

__all__ = [
    'DatabaseConnection',
    'UnitOfWork'
]
