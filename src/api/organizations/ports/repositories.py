"""Repository protocols (ports) for the organizations bounded context."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from organizations.infrastructure.models import OrganizationModel


@runtime_checkable
class IOrganizationRepository(Protocol):
    """Repository for organization persistence.

    Always used with a tenant-scoped session, so lookups never cross
    tenants.
    """

    async def get_by_id(self, organization_id: int) -> OrganizationModel | None:
        """Retrieve an organization, or None if missing or out of scope."""
        ...

    async def list_all(self) -> list[OrganizationModel]:
        """List every organization visible to the session."""
        ...

    async def name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        """Whether another organization in scope already uses ``name``."""
        ...

    async def save(self, organization: OrganizationModel) -> OrganizationModel:
        """Persist a new or modified organization.

        Raises:
            DuplicateConstraintError: If the name is taken in the tenant
        """
        ...

    async def delete(self, organization: OrganizationModel) -> None:
        """Delete an organization."""
        ...
