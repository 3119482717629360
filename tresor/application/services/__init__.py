"""Application services.

This module contains services that orchestrate business operations
by combining Core and Infrastructure components.
"""

from tresor.application.services.base import ServiceBase
from tresor.application.services.user_service import UserService
from tresor.application.services.auth_service import AuthService

__all__ = [
    "ServiceBase",
    "UserService",
    "AuthService",
]
