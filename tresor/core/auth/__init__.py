"""Credential handling: hashing, password policy and the authentication decision."""

from tresor.core.auth.auth_types import ValidationResult
from tresor.core.auth.authenticator import Authenticator
from tresor.core.auth.password_hasher import PasswordHasher
from tresor.core.auth.password_policy import PasswordPolicy

__all__ = [
    "Authenticator",
    "PasswordHasher",
    "PasswordPolicy",
    "ValidationResult",
]
