"""Organization application service.

Runs on the tenant-scoped session. The service never reads or writes a
tenant id: new organizations are stamped on flush and every lookup is
filtered by the session.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from organizations.application.observability import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from organizations.infrastructure.models import OrganizationModel
from organizations.ports.exceptions import OrganizationNotFoundError
from organizations.ports.repositories import IOrganizationRepository
from shared_kernel.exceptions import DuplicateConstraintError


class OrganizationService:
    """Application service for organizations."""

    def __init__(
        self,
        organization_repository: IOrganizationRepository,
        session: AsyncSession,
        probe: OrganizationServiceProbe | None = None,
    ):
        """Initialize OrganizationService with dependencies.

        Args:
            organization_repository: Repository for organization persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._repository = organization_repository
        self._session = session
        self._probe = probe or DefaultOrganizationServiceProbe()

    async def create_organization(
        self,
        name: str,
        description: str | None = None,
    ) -> OrganizationModel:
        """Create an organization in the caller's tenant.

        Raises:
            DuplicateConstraintError: If the name is taken in the tenant
        """
        async with self._session.begin():
            await self._ensure_name_free(name)
            organization = await self._repository.save(
                OrganizationModel(name=name, description=description)
            )

        self._probe.organization_created(organization.id, organization.tenant_id, name)
        return organization

    async def list_organizations(self) -> list[OrganizationModel]:
        return await self._repository.list_all()

    async def get_organization(self, organization_id: int) -> OrganizationModel:
        """Fetch one organization of the caller's tenant.

        Raises:
            OrganizationNotFoundError: If missing or in another tenant
        """
        organization = await self._repository.get_by_id(organization_id)
        if organization is None:
            self._probe.organization_not_found(organization_id)
            raise OrganizationNotFoundError(f"Organization {organization_id} not found")
        return organization

    async def update_organization(
        self,
        organization_id: int,
        name: str | None = None,
        description: str | None = None,
    ) -> OrganizationModel:
        """Rename an organization or change its description.

        Raises:
            OrganizationNotFoundError: If missing or in another tenant
            DuplicateConstraintError: If the new name is taken in the tenant
        """
        async with self._session.begin():
            organization = await self.get_organization(organization_id)
            if name is not None and name != organization.name:
                await self._ensure_name_free(name, exclude_id=organization_id)
                organization.name = name
            if description is not None:
                organization.description = description
            await self._repository.save(organization)

        self._probe.organization_updated(organization_id)
        return organization

    async def delete_organization(self, organization_id: int) -> None:
        """Delete an organization.

        Raises:
            OrganizationNotFoundError: If missing or in another tenant
        """
        async with self._session.begin():
            organization = await self.get_organization(organization_id)
            await self._repository.delete(organization)

        self._probe.organization_deleted(organization_id)

    async def _ensure_name_free(self, name: str, exclude_id: int | None = None) -> None:
        if await self._repository.name_taken(name, exclude_id=exclude_id):
            self._probe.duplicate_organization_name(name)
            raise DuplicateConstraintError("name already exists", field="name")
