"""Authentication decision - proves knowledge of a password against a stored hash"""

from typing import Optional

from tresor.core.auth.password_hasher import PasswordHasher
from tresor.core.errors import AuthenticationError, AuthFailureReason


class Authenticator:
    """Decides a single login attempt.

    Success is signalled only by returning True; every failure raises
    AuthenticationError. The reason attribute tells a missing credential
    apart from a wrong password, but both reasons must be rendered to the
    client with the same message.
    """
    
    def __init__(self, password_hasher: PasswordHasher):
        self.password_hasher = password_hasher
    
    def authenticate(
        self,
        identity: Optional[str],
        candidate_password: Optional[str],
        stored_hash: Optional[str]
    ) -> bool:
        """
        Authenticate a user
        
        Args:
            identity: The login identity (email address)
            candidate_password: The submitted plain text password
            stored_hash: The stored password hash for the identity
            
        Returns:
            True if authentication is successful
            
        Raises:
            AuthenticationError: If authentication fails
        """
        if identity is None or candidate_password is None or stored_hash is None:
            raise AuthenticationError(
                "Invalid credentials",
                AuthFailureReason.MISSING_CREDENTIALS
            )
        
        if not self.password_hasher.verify_password(candidate_password, stored_hash):
            raise AuthenticationError(
                "Invalid username or password",
                AuthFailureReason.PASSWORD_MISMATCH
            )
        
        return True
