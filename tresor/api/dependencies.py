"""Common dependencies for API routes.

Long-lived credential components are created once per application in the
lifespan handler and kept on app.state; services are cheap and built per
request around the request's database session.
"""

from dataclasses import dataclass
from typing import AsyncGenerator, Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tresor.application.services.auth_service import AuthService
from tresor.application.services.user_service import UserService
from tresor.core.auth.authenticator import Authenticator
from tresor.core.auth.password_hasher import PasswordHasher
from tresor.core.auth.password_policy import PasswordPolicy
from tresor.core.config import Settings
from tresor.infrastructure.concurrency import CredentialExecutor
from tresor.infrastructure.database import UnitOfWork


@dataclass
class CredentialComponents:
    """Credential core wired for one application instance."""
    password_hasher: PasswordHasher
    password_policy: PasswordPolicy
    authenticator: Authenticator
    executor: CredentialExecutor
    dummy_hash: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialComponents":
        password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
        return cls(
            password_hasher=password_hasher,
            password_policy=PasswordPolicy(),
            authenticator=Authenticator(password_hasher),
            executor=CredentialExecutor(settings.effective_credential_workers),
        )


# Settings dependency
def get_settings_dep(request: Request) -> Settings:
    """Get application settings."""
    return request.app.state.settings


def get_credentials(request: Request) -> CredentialComponents:
    """Get the credential components of this application."""
    return request.app.state.credentials


def get_password_policy(
    credentials: CredentialComponents = Depends(get_credentials)
) -> PasswordPolicy:
    return credentials.password_policy


# Database session dependency
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with request.app.state.db.get_session() as session:
        yield session


# Unit of work factory
def get_unit_of_work_factory(db: AsyncSession = Depends(get_db)) -> Callable[[], UnitOfWork]:
    """Get unit of work factory."""
    def factory() -> UnitOfWork:
        return UnitOfWork(db)
    return factory


# Service dependencies
def get_user_service(
    credentials: CredentialComponents = Depends(get_credentials),
    unit_of_work_factory: Callable[[], UnitOfWork] = Depends(get_unit_of_work_factory)
) -> UserService:
    """Get user service instance."""
    return UserService(
        password_policy=credentials.password_policy,
        password_hasher=credentials.password_hasher,
        executor=credentials.executor,
        unit_of_work_factory=unit_of_work_factory
    )


def get_auth_service(
    credentials: CredentialComponents = Depends(get_credentials),
    unit_of_work_factory: Callable[[], UnitOfWork] = Depends(get_unit_of_work_factory),
    settings: Settings = Depends(get_settings_dep)
) -> AuthService:
    """Get auth service instance."""
    return AuthService(
        authenticator=credentials.authenticator,
        executor=credentials.executor,
        unit_of_work_factory=unit_of_work_factory,
        timeout_seconds=settings.credential_timeout_seconds,
        dummy_hash=credentials.dummy_hash
    )
