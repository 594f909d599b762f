"""HTTP routes for user management.

All routes are tenant scoped: a user of another tenant is reported as
not found.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.application.services import UserService
from iam.dependencies.access import require_policies
from iam.dependencies.user import get_user_service
from iam.ports.exceptions import UserNotFoundError
from iam.presentation.users import policies
from iam.presentation.users.models import UpdateUserRequest, UserResponse
from shared_kernel.auth import Principal

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get("")
async def list_users(
    _: Annotated[Principal, Depends(require_policies(policies.READ_USERS))],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    """List the users of the caller's tenant."""
    users = await service.list_users()
    return [UserResponse.from_model(user) for user in users]


@router.get("/{id}")
async def get_user(
    id: int,
    _: Annotated[Principal, Depends(require_policies(policies.READ_USER))],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get a user by ID.

    Callers holding only ``readOwn`` may read themselves.

    Raises:
        HTTPException: 404 if the user is missing or in another tenant
    """
    try:
        user = await service.get_user(id)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {id} not found",
        ) from e
    return UserResponse.from_model(user)


@router.patch("/{id}")
async def update_user(
    id: int,
    request: UpdateUserRequest,
    _: Annotated[Principal, Depends(require_policies(policies.UPDATE_USER))],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Update a user's username, email or password.

    Raises:
        HTTPException: 404 if the user is missing or in another tenant
        DuplicateConstraintError: 409 if the new username or email is taken
    """
    try:
        user = await service.update_user(id, request.to_changes())
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {id} not found",
        ) from e
    return UserResponse.from_model(user)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_user(
    id: int,
    _: Annotated[Principal, Depends(require_policies(policies.DELETE_USER))],
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Delete a user.

    Raises:
        HTTPException: 404 if the user is missing or in another tenant
    """
    try:
        await service.delete_user(id)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {id} not found",
        ) from e
