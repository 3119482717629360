"""User management routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
import structlog

from tresor.api.dependencies import get_user_service
from tresor.api.exception_handlers import raise_for_result
from tresor.api.models.common_models import MessageResponse
from tresor.api.models.user_models import (
    ChangePasswordRequest,
    CreateUserRequest,
    CreateUserResponse,
    EmailAddressRequest,
    UpdateUserRequest,
    UserIdResponse,
    UserListResponse,
    UserResponse,
)
from tresor.application.services.user_service import UserService
from tresor.application.dto.common_dto import PaginationParams
from tresor.application.dto.user_dto import (
    ChangePasswordRequest as ChangePasswordDTO,
    RegisterUserRequest,
    UpdateUserRequest as UpdateUserDTO,
    UserDTO,
)
from tresor.core.exceptions import ErrorResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/users", tags=["users"])


def _to_response(user: UserDTO) -> UserResponse:
    return UserResponse(**user.to_dict())


@router.post(
    "",
    response_model=CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a new user account after checking password strength",
    responses={
        400: {"description": "Validation or password policy error", "model": ErrorResponse},
        409: {"description": "Email already exists", "model": ErrorResponse},
    }
)
async def register_user(
    request: CreateUserRequest,
    user_service: UserService = Depends(get_user_service)
) -> CreateUserResponse:
    """Register a new user."""
    logger.info("user_registration_requested", email=request.email)

    result = await user_service.register_user(RegisterUserRequest(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
        password_confirmation=request.password_confirmation
    ))
    raise_for_result(result)

    return CreateUserResponse(user=_to_response(result.value))


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users"
)
async def list_users(
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    user_service: UserService = Depends(get_user_service)
) -> UserListResponse:
    result = await user_service.list_users(PaginationParams(page=page, per_page=per_page))
    raise_for_result(result)

    paged = result.value
    return UserListResponse(
        items=[_to_response(user) for user in paged.items],
        total=paged.total,
        page=paged.page,
        per_page=paged.per_page,
        pages=paged.pages
    )


@router.post(
    "/byemail",
    response_model=UserIdResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Look up a user id by email",
    responses={404: {"description": "No user with this email", "model": ErrorResponse}}
)
async def get_user_id_by_email(
    request: EmailAddressRequest,
    user_service: UserService = Depends(get_user_service)
) -> UserIdResponse:
    result = await user_service.find_by_email(request.email)
    raise_for_result(result)
    return UserIdResponse(answer=result.value.id)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user by id",
    responses={404: {"description": "User not found", "model": ErrorResponse}}
)
async def get_user(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    result = await user_service.get_user_by_id(user_id)
    raise_for_result(result)
    return _to_response(result.value)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user profile",
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        409: {"description": "Email already exists", "model": ErrorResponse},
    }
)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    user_service: UserService = Depends(get_user_service)
) -> UserResponse:
    result = await user_service.update_user(user_id, UpdateUserDTO(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email
    ))
    raise_for_result(result)
    return _to_response(result.value)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
    responses={404: {"description": "User not found", "model": ErrorResponse}}
)
async def delete_user(
    user_id: UUID,
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    result = await user_service.delete_user(user_id)
    raise_for_result(result)
    return MessageResponse(message="User successfully deleted!")


@router.post(
    "/{user_id}/password",
    response_model=MessageResponse,
    summary="Change password",
    responses={
        400: {"description": "Password policy error", "model": ErrorResponse},
        401: {"description": "Current password is incorrect", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    }
)
async def change_password(
    user_id: UUID,
    request: ChangePasswordRequest,
    user_service: UserService = Depends(get_user_service)
) -> MessageResponse:
    result = await user_service.change_password(user_id, ChangePasswordDTO(
        current_password=request.current_password,
        new_password=request.new_password,
        new_password_confirmation=request.new_password_confirmation
    ))
    raise_for_result(result)
    return MessageResponse(message="Password changed successfully")
