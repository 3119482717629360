"""Password hashing module - handles password hashing and verification only"""

from typing import Final, Optional

from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from tresor.core.errors import InvalidInputError


class PasswordHasher:
    """Handles password hashing and verification only"""
    
    # Use bcrypt with cost factor 12
    BCRYPT_ROUNDS: Final[int] = 12
    
    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.rounds = rounds
        # min_rounds makes hashes from a weaker configuration report needs_rehash
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__min_rounds=rounds,
        )
    
    def hash_password(self, plain_password: Optional[str]) -> str:
        """
        Hash a plain text password
        
        Args:
            plain_password: The password to hash
            
        Returns:
            The encoded bcrypt hash ($2b$<cost>$<salt><digest>)
            
        Raises:
            InvalidInputError: If password is missing, blank, or contains a
                NUL character, which bcrypt cannot encode
        """
        if plain_password is None or not plain_password.strip():
            raise InvalidInputError("Password cannot be null or empty")
            
        try:
            return self._context.hash(plain_password)
        except PasswordValueError as e:
            raise InvalidInputError(str(e)) from e
    
    def verify_password(
        self,
        plain_password: Optional[str],
        hashed_password: Optional[str]
    ) -> bool:
        """
        Verify a password against its hash
        
        Args:
            plain_password: The password to verify
            hashed_password: The hash to verify against
            
        Returns:
            True if password matches, False otherwise
        """
        if not plain_password or not hashed_password:
            return False
            
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Unknown or malformed hash format
            return False
    
    def needs_rehash(self, hashed_password: str) -> bool:
        """
        Check if password hash needs to be updated
        
        Args:
            hashed_password: The hash to check
            
        Returns:
            True if rehashing is recommended
        """
        try:
            return self._context.needs_update(hashed_password)
        except (ValueError, TypeError):
            return True
