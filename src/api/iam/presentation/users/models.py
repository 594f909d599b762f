"""Pydantic models for user API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from iam.application.security import MAX_PASSWORD_BYTES
from iam.application.value_objects import UserChanges
from iam.infrastructure.models import UserModel


class UpdateUserRequest(BaseModel):
    """Request model for a partial user update."""

    username: str | None = Field(
        default=None, description="New username", min_length=3, max_length=255
    )
    email: EmailStr | None = Field(default=None, description="New email address")
    password: str | None = Field(
        default=None,
        description="New password",
        min_length=8,
        max_length=MAX_PASSWORD_BYTES,
    )

    def to_changes(self) -> UserChanges:
        return UserChanges(
            username=self.username,
            email=str(self.email) if self.email is not None else None,
            password=self.password,
        )


class UserResponse(BaseModel):
    """Response model for user. The password hash is never exposed."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    role: str = Field(..., description="Role name")
    tenant_id: int = Field(..., description="Owning tenant ID")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_model(cls, user: UserModel) -> UserResponse:
        """Convert a UserModel row to API response.

        Args:
            user: User row with its role loaded

        Returns:
            UserResponse
        """
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.name,
            tenant_id=user.tenant_id,
            created_at=user.created_at,
        )
