"""Pydantic models for organization API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from organizations.infrastructure.models import OrganizationModel


class CreateOrganizationRequest(BaseModel):
    """Request model for creating an organization.

    Unknown fields, including any ``tenant_id``, are ignored; the tenant
    always comes from the caller.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Organization name", min_length=1, max_length=255)
    description: str | None = Field(default=None, description="Free-form description")


class UpdateOrganizationRequest(BaseModel):
    """Request model for updating an organization."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(
        default=None, description="New name", min_length=1, max_length=255
    )
    description: str | None = Field(default=None, description="New description")


class OrganizationResponse(BaseModel):
    """Response model for organization."""

    id: int = Field(..., description="Organization ID")
    name: str = Field(..., description="Organization name")
    description: str | None = Field(default=None, description="Description")
    tenant_id: int = Field(..., description="Owning tenant ID")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_model(cls, organization: OrganizationModel) -> OrganizationResponse:
        """Convert an OrganizationModel row to API response."""
        return cls(
            id=organization.id,
            name=organization.name,
            description=organization.description,
            tenant_id=organization.tenant_id,
            created_at=organization.created_at,
        )
