"""Password strength policy - evaluates candidate passwords only"""

import re
from typing import Final, List, Optional

from tresor.core.auth.auth_types import ValidationResult
from tresor.core.errors import PolicyViolationError


class PasswordPolicy:
    """Checks a candidate password against the registration strength rules.

    Every rule is evaluated so the caller receives the complete list of
    violations, in rule order. Only a blank password short-circuits.
    """
    
    MIN_LENGTH: Final[int] = 8
    MAX_LENGTH: Final[int] = 128
    
    HAS_UPPER = re.compile(r'[A-Z]')
    HAS_LOWER = re.compile(r'[a-z]')
    HAS_NUMBER = re.compile(r'[0-9]')
    HAS_SPECIAL = re.compile(r'[!@#$%^&*(),.?":{}|<>]')
    
    EMPTY_MESSAGE: Final[str] = "Password cannot be empty"
    NUL_MESSAGE: Final[str] = "Password cannot contain null characters"
    
    def validate(self, password: Optional[str]) -> ValidationResult:
        """
        Validate password strength
        
        Args:
            password: The password to validate
            
        Returns:
            ValidationResult with any errors
        """
        if password is None or not password.strip():
            return ValidationResult(False, [self.EMPTY_MESSAGE])
        
        errors: List[str] = []
        
        if len(password) < self.MIN_LENGTH:
            errors.append(f"Password must be at least {self.MIN_LENGTH} characters long")
        
        if len(password) > self.MAX_LENGTH:
            errors.append(f"Password cannot be longer than {self.MAX_LENGTH} characters")
        
        if not self.HAS_UPPER.search(password):
            errors.append("Password must contain at least one uppercase letter")
        
        if not self.HAS_LOWER.search(password):
            errors.append("Password must contain at least one lowercase letter")
        
        if not self.HAS_NUMBER.search(password):
            errors.append("Password must contain at least one number")
        
        if not self.HAS_SPECIAL.search(password):
            errors.append("Password must contain at least one special character")
        
        # bcrypt cannot encode NUL, so such a password could never be stored
        if "\x00" in password:
            errors.append(self.NUL_MESSAGE)
        
        return ValidationResult(len(errors) == 0, errors)
    
    def enforce(self, password: Optional[str]) -> None:
        """
        Raise instead of returning a result
        
        Raises:
            PolicyViolationError: If any rule failed, with every violation
        """
        result = self.validate(password)
        if not result.is_valid:
            raise PolicyViolationError(result.errors)
