"""Pydantic models for role API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from iam.infrastructure.models import PermissionModel, RoleModel


class PermissionResponse(BaseModel):
    """Response model for a permission."""

    name: str = Field(..., description="Permission name, e.g. readAny:user")
    action: str = Field(..., description="Action")
    subject: str = Field(..., description="Subject")

    @classmethod
    def from_model(cls, permission: PermissionModel) -> PermissionResponse:
        return cls(
            name=permission.name,
            action=permission.action,
            subject=permission.subject,
        )


class RoleResponse(BaseModel):
    """Response model for a role with its permissions."""

    id: int = Field(..., description="Role ID")
    name: str = Field(..., description="Role name")
    permissions: list[PermissionResponse] = Field(
        default_factory=list, description="Permissions granted by the role"
    )

    @classmethod
    def from_model(cls, role: RoleModel) -> RoleResponse:
        return cls(
            id=role.id,
            name=role.name,
            permissions=[PermissionResponse.from_model(p) for p in role.permissions],
        )
