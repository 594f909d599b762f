"""HTTP routes for registration, login and the caller's profile."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from iam.application.services import AuthService, UserService
from iam.dependencies.access import require_policies
from iam.dependencies.user import get_auth_service, get_user_service
from iam.presentation.auth.models import LoginRequest, RegisterRequest, TokenResponse
from iam.presentation.users.models import UserResponse
from shared_kernel.auth import Principal

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Create a tenant and its first user.

    Public. The submitted tenant label becomes ``<label>.<root domain>``.

    Args:
        request: Username, email, password and tenant label
        service: Auth service on a public session

    Returns:
        TokenResponse for the new user

    Raises:
        DuplicateConstraintError: 409 if username, email or domain is taken
    """
    token = await service.register(request.to_registration())
    return TokenResponse.from_domain(token)


@router.post("/login")
async def login(
    request: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Exchange a username and password for an access token.

    Raises:
        InvalidCredentialsError: 401 on a bad username or password
    """
    token = await service.login(request.username, request.password)
    return TokenResponse.from_domain(token)


@router.get("/profile")
async def profile(
    principal: Annotated[Principal, Depends(require_policies())],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Return the caller's own user record (tenant scoped)."""
    user = await service.get_user(principal.user_id)
    return UserResponse.from_model(user)
