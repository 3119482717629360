"""Login service.

Resolves the login identity in the user store and hands the stored hash to
the Authenticator. Whatever the internal reason, a refused login surfaces as
the same message so callers cannot learn whether the email exists.
"""

import asyncio
from typing import Callable, Optional

from tresor.core.auth.authenticator import Authenticator
from tresor.core.errors import AuthenticationError
from tresor.infrastructure.concurrency import CredentialExecutor
from tresor.infrastructure.database import UnitOfWork
from tresor.infrastructure.metrics import (
    authentication_attempts_total,
    password_hash_duration_seconds,
    password_verify_duration_seconds,
    track_duration,
)
from tresor.application.services.base import ServiceBase
from tresor.application.dto.auth_dto import LoginRequest, LoginResult
from tresor.application.dto.user_dto import UserDTO
from tresor.application.dto.common_dto import Result, ErrorCode

INVALID_LOGIN_MESSAGE = "Invalid username or password"


class AuthService(ServiceBase):
    """Service for password logins."""

    def __init__(
        self,
        authenticator: Authenticator,
        executor: CredentialExecutor,
        unit_of_work_factory: Callable[[], UnitOfWork],
        timeout_seconds: float,
        dummy_hash: Optional[str] = None
    ):
        """Initialize auth service.

        Args:
            authenticator: Credential decision component
            executor: Worker pool for verification
            unit_of_work_factory: Factory for creating unit of work instances
            timeout_seconds: Upper bound for a whole authentication call
            dummy_hash: Hash verified for unknown emails so that they cost
                the same time as a wrong password
        """
        super().__init__()
        self.authenticator = authenticator
        self.executor = executor
        self.unit_of_work_factory = unit_of_work_factory
        self.timeout_seconds = timeout_seconds
        self.dummy_hash = dummy_hash

    def _authenticate(self, identity, password, stored_hash) -> bool:
        with track_duration(password_verify_duration_seconds):
            return self.authenticator.authenticate(identity, password, stored_hash)

    def _rehash(self, password: str) -> str:
        with track_duration(password_hash_duration_seconds):
            return self.authenticator.password_hasher.hash_password(password)

    async def login(self, request: LoginRequest) -> Result[LoginResult]:
        """Authenticate an email/password pair.

        Args:
            request: Login request

        Returns:
            Result containing the authenticated user or error
        """
        self.logger.info("login_attempt", email=request.username)

        try:
            async with self.unit_of_work_factory() as uow:
                user = None
                if request.username:
                    user = await uow.users.get_by_email(request.username)

                if user is None:
                    self.logger.warning("login_unknown_identity", email=request.username)
                    stored_hash = self.dummy_hash
                else:
                    stored_hash = user.password_hash

                try:
                    await asyncio.wait_for(
                        self.executor.run(
                            self._authenticate,
                            request.username,
                            request.password,
                            stored_hash
                        ),
                        timeout=self.timeout_seconds
                    )
                except AuthenticationError as e:
                    authentication_attempts_total.labels(outcome=e.reason.value).inc()
                    self.logger.warning(
                        "login_rejected",
                        email=request.username,
                        reason=e.reason.value
                    )
                    return Result.fail(INVALID_LOGIN_MESSAGE, ErrorCode.UNAUTHORIZED)

                if user is None:
                    # Only reachable if the dummy hash matched the candidate
                    authentication_attempts_total.labels(outcome="unknown_identity").inc()
                    return Result.fail(INVALID_LOGIN_MESSAGE, ErrorCode.UNAUTHORIZED)

                password_hasher = self.authenticator.password_hasher
                rehashed = False
                if password_hasher.needs_rehash(user.password_hash):
                    user.password_hash = await self.executor.run(self._rehash, request.password)
                    await uow.users.add(user)
                    rehashed = True
                    self.logger.info("password_rehashed", user_id=str(user.id))

                user_dto = UserDTO.from_model(user)

            authentication_attempts_total.labels(outcome="success").inc()
            self.logger.info(
                "login_succeeded",
                user_id=str(user_dto.id),
                password_rehashed=rehashed
            )
            return Result.ok(LoginResult(user=user_dto, password_rehashed=rehashed))

        except asyncio.TimeoutError:
            authentication_attempts_total.labels(outcome="timeout").inc()
            self.logger.error(
                "login_timed_out",
                email=request.username,
                timeout_seconds=self.timeout_seconds
            )
            return Result.fail(
                "Authentication timed out",
                ErrorCode.SERVICE_UNAVAILABLE
            )
        except Exception as e:
            authentication_attempts_total.labels(outcome="error").inc()
            self.logger.error(
                "login_failed_unexpectedly",
                error=str(e),
                email=request.username,
                exc_info=True
            )
            return Result.fail(
                "An error occurred during login",
                ErrorCode.INTERNAL_ERROR
            )
