"""Dependency injection for the organizations bounded context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.access import RouteAccess, session_for
from organizations.application.observability import (
    DefaultOrganizationServiceProbe,
    OrganizationServiceProbe,
)
from organizations.application.organization_service import OrganizationService
from organizations.infrastructure.organization_repository import (
    OrganizationRepository,
)


def get_organization_service_probe() -> OrganizationServiceProbe:
    """Get OrganizationServiceProbe instance."""
    return DefaultOrganizationServiceProbe()


def get_organization_service(
    session: Annotated[AsyncSession, Depends(session_for(RouteAccess.TENANT_SCOPED))],
    probe: Annotated[
        OrganizationServiceProbe, Depends(get_organization_service_probe)
    ],
) -> OrganizationService:
    """Get OrganizationService instance on the tenant-scoped session."""
    return OrganizationService(
        organization_repository=OrganizationRepository(session),
        session=session,
        probe=probe,
    )
