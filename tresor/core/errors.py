"""Base exception classes for Tresor"""

from enum import Enum
from typing import List, Optional, Dict, Any


class TresorError(Exception):
    """Base exception for all Tresor errors"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(TresorError):
    """Raised when a credential operation receives missing or blank input"""
    pass


class PolicyViolationError(TresorError):
    """Raised when a password fails one or more strength rules"""
    
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            f"Password policy violated: {', '.join(self.errors)}",
            {"errors": self.errors}
        )


class AuthFailureReason(str, Enum):
    """Why an authentication attempt was refused.

    Kept for server-side diagnostics only; callers show one generic message.
    """
    MISSING_CREDENTIALS = "missing_credentials"
    PASSWORD_MISMATCH = "password_mismatch"


class AuthenticationError(TresorError):
    """Raised when authentication fails"""
    
    def __init__(self, message: str, reason: AuthFailureReason):
        self.reason = reason
        super().__init__(message, {"reason": reason.value})
