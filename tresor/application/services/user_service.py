"""User management service.

This service orchestrates user-related operations by combining the credential
core with the user store while managing transactions and errors.
"""

from typing import Callable
from uuid import UUID

from tresor.core.auth.password_hasher import PasswordHasher
from tresor.core.auth.password_policy import PasswordPolicy
from tresor.infrastructure.concurrency import CredentialExecutor
from tresor.infrastructure.database import UnitOfWork
from tresor.infrastructure.database.repositories import EmailAlreadyStoredError
from tresor.infrastructure.database.models import UserModel
from tresor.infrastructure.metrics import (
    password_hash_duration_seconds,
    password_policy_rejections_total,
    password_verify_duration_seconds,
    track_duration,
)
from tresor.application.services.base import ServiceBase
from tresor.application.dto.user_dto import (
    RegisterUserRequest,
    UserDTO,
    UpdateUserRequest,
    ChangePasswordRequest
)
from tresor.application.dto.common_dto import Result, ErrorCode, PagedResult, PaginationParams


class UserService(ServiceBase):
    """Service for user management operations.

    Handles user registration, lookups, profile updates and password changes.
    Hashing and verification run on the credential executor so the event
    loop is never blocked by bcrypt.
    """

    def __init__(
        self,
        password_policy: PasswordPolicy,
        password_hasher: PasswordHasher,
        executor: CredentialExecutor,
        unit_of_work_factory: Callable[[], UnitOfWork]
    ):
        """Initialize user service.

        Args:
            password_policy: Password strength rules
            password_hasher: Password hashing service
            executor: Worker pool for hashing
            unit_of_work_factory: Factory for creating unit of work instances
        """
        super().__init__()
        self.password_policy = password_policy
        self.password_hasher = password_hasher
        self.executor = executor
        self.unit_of_work_factory = unit_of_work_factory

    def _hash(self, password: str) -> str:
        with track_duration(password_hash_duration_seconds):
            return self.password_hasher.hash_password(password)

    def _verify(self, password: str, password_hash: str) -> bool:
        with track_duration(password_verify_duration_seconds):
            return self.password_hasher.verify_password(password, password_hash)

    def _check_new_password(self, password: str, confirmation: str) -> Result[None]:
        policy_result = self.password_policy.validate(password)
        if not policy_result.is_valid:
            password_policy_rejections_total.inc()
            self.logger.warning(
                "password_policy_rejected",
                violations=len(policy_result.errors)
            )
            return Result.from_validation(policy_result)

        if password != confirmation:
            return Result.fail(
                "Passwords do not match",
                ErrorCode.VALIDATION_ERROR,
                ["Passwords do not match"]
            )

        return Result.ok(None)

    async def register_user(self, request: RegisterUserRequest) -> Result[UserDTO]:
        """Register a new user.

        Args:
            request: User registration request

        Returns:
            Result containing created user DTO or error
        """
        check = self._check_new_password(request.password, request.password_confirmation)
        if not check.success:
            return check.cast()

        try:
            async with self.unit_of_work_factory() as uow:
                if await uow.users.email_exists(request.email):
                    self.logger.warning("email_already_registered", email=request.email)
                    return Result.fail(
                        "Email already exists",
                        ErrorCode.CONFLICT
                    )

                password_hash = await self.executor.run(self._hash, request.password)

                user = await uow.users.add(UserModel(
                    first_name=request.first_name,
                    last_name=request.last_name,
                    email=request.email,
                    password_hash=password_hash
                ))
                user_dto = UserDTO.from_model(user)

            self.logger.info(
                "user_registered",
                user_id=str(user_dto.id),
                email=user_dto.email
            )
            return Result.ok(user_dto)

        except EmailAlreadyStoredError:
            self.logger.warning("email_already_registered", email=request.email)
            return Result.fail("Email already exists", ErrorCode.CONFLICT)
        except Exception as e:
            self.logger.error(
                "user_registration_failed",
                error=str(e),
                email=request.email,
                exc_info=True
            )
            return Result.fail(
                "Error creating user",
                ErrorCode.INTERNAL_ERROR
            )

    async def get_user_by_id(self, user_id: UUID) -> Result[UserDTO]:
        """Get user by ID."""
        try:
            async with self.unit_of_work_factory() as uow:
                user = await uow.users.get(user_id)

                if not user:
                    return Result.fail(
                        f"User not found: {user_id}",
                        ErrorCode.NOT_FOUND
                    )

                return Result.ok(UserDTO.from_model(user))

        except Exception as e:
            self.logger.error("user_lookup_failed", error=str(e), user_id=str(user_id))
            return Result.fail("Failed to get user", ErrorCode.INTERNAL_ERROR)

    async def find_by_email(self, email: str) -> Result[UserDTO]:
        """Get user by email address."""
        try:
            async with self.unit_of_work_factory() as uow:
                user = await uow.users.get_by_email(email)

                if not user:
                    return Result.fail(
                        "No user found with this email",
                        ErrorCode.NOT_FOUND
                    )

                return Result.ok(UserDTO.from_model(user))

        except Exception as e:
            self.logger.error("user_lookup_failed", error=str(e), email=email)
            return Result.fail("Failed to get user", ErrorCode.INTERNAL_ERROR)

    async def list_users(self, pagination: PaginationParams) -> Result[PagedResult[UserDTO]]:
        """List users page by page."""
        try:
            async with self.unit_of_work_factory() as uow:
                users = await uow.users.page(
                    offset=pagination.offset,
                    limit=pagination.limit
                )
                total = await uow.users.count()

                return Result.ok(PagedResult(
                    items=[UserDTO.from_model(user) for user in users],
                    total=total,
                    page=pagination.page,
                    per_page=pagination.per_page
                ))

        except Exception as e:
            self.logger.error("user_list_failed", error=str(e))
            return Result.fail("Failed to list users", ErrorCode.INTERNAL_ERROR)

    async def update_user(self, user_id: UUID, request: UpdateUserRequest) -> Result[UserDTO]:
        """Update profile fields. The password hash is never touched here."""
        try:
            async with self.unit_of_work_factory() as uow:
                user = await uow.users.get(user_id)

                if not user:
                    return Result.fail(
                        f"User not found: {user_id}",
                        ErrorCode.NOT_FOUND
                    )

                if request.email and request.email != user.email:
                    if await uow.users.email_exists(request.email):
                        return Result.fail(
                            "Email already exists",
                            ErrorCode.CONFLICT
                        )
                    user.email = request.email

                if request.first_name is not None:
                    user.first_name = request.first_name

                if request.last_name is not None:
                    user.last_name = request.last_name

                user = await uow.users.add(user)
                user_dto = UserDTO.from_model(user)

            self.logger.info("user_updated", user_id=str(user_id))
            return Result.ok(user_dto)

        except EmailAlreadyStoredError:
            return Result.fail("Email already exists", ErrorCode.CONFLICT)
        except Exception as e:
            self.logger.error("user_update_failed", error=str(e), user_id=str(user_id))
            return Result.fail("Failed to update user", ErrorCode.INTERNAL_ERROR)

    async def delete_user(self, user_id: UUID) -> Result[bool]:
        """Delete a user."""
        try:
            async with self.unit_of_work_factory() as uow:
                deleted = await uow.users.remove(user_id)

            if not deleted:
                return Result.fail(
                    f"User not found: {user_id}",
                    ErrorCode.NOT_FOUND
                )

            self.logger.info("user_deleted", user_id=str(user_id))
            return Result.ok(True)

        except Exception as e:
            self.logger.error("user_delete_failed", error=str(e), user_id=str(user_id))
            return Result.fail("Failed to delete user", ErrorCode.INTERNAL_ERROR)

    async def change_password(
        self,
        user_id: UUID,
        request: ChangePasswordRequest
    ) -> Result[bool]:
        """Change user password.

        Args:
            user_id: User ID
            request: Password change request

        Returns:
            Result indicating success or failure
        """
        check = self._check_new_password(
            request.new_password,
            request.new_password_confirmation
        )
        if not check.success:
            return check.cast()

        try:
            async with self.unit_of_work_factory() as uow:
                user = await uow.users.get(user_id)

                if not user:
                    return Result.fail(
                        f"User not found: {user_id}",
                        ErrorCode.NOT_FOUND
                    )

                is_current = await self.executor.run(
                    self._verify,
                    request.current_password,
                    user.password_hash
                )
                if not is_current:
                    self.logger.warning("password_change_rejected", user_id=str(user_id))
                    return Result.fail(
                        "Current password is incorrect",
                        ErrorCode.UNAUTHORIZED
                    )

                user.password_hash = await self.executor.run(self._hash, request.new_password)
                await uow.users.add(user)

            self.logger.info("user_password_changed", user_id=str(user_id))
            return Result.ok(True)

        except Exception as e:
            self.logger.error(
                "password_change_failed",
                error=str(e),
                user_id=str(user_id),
                exc_info=True
            )
            return Result.fail("Failed to change password", ErrorCode.INTERNAL_ERROR)
