"""Authentication routes."""

from fastapi import APIRouter, Depends
import structlog

from tresor.api.dependencies import get_auth_service, get_password_policy
from tresor.api.exception_handlers import raise_for_result
from tresor.api.models.auth_models import (
    LoginRequest,
    LoginResponse,
    PasswordCheckRequest,
    PasswordCheckResponse,
)
from tresor.application.services.auth_service import AuthService
from tresor.application.dto.auth_dto import LoginRequest as LoginRequestDTO
from tresor.core.auth.password_policy import PasswordPolicy
from tresor.core.exceptions import ErrorResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    description="Authenticate a user with email and password",
    responses={
        401: {"description": "Invalid username or password", "model": ErrorResponse},
        503: {"description": "Authentication timed out", "model": ErrorResponse},
    }
)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """Check the credentials; no session or token is issued."""
    result = await auth_service.login(LoginRequestDTO(
        username=request.username,
        password=request.password
    ))
    raise_for_result(result)

    return LoginResponse(
        message="Login successful",
        success=True,
        user_id=result.value.user.id
    )


@router.post(
    "/password/check",
    response_model=PasswordCheckResponse,
    summary="Check password strength",
    description="Evaluate a candidate password against the registration rules"
)
async def check_password(
    request: PasswordCheckRequest,
    password_policy: PasswordPolicy = Depends(get_password_policy)
) -> PasswordCheckResponse:
    result = password_policy.validate(request.password)
    return PasswordCheckResponse(is_valid=result.is_valid, errors=result.errors)
