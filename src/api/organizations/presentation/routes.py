"""HTTP routes for organizations.

All routes are tenant scoped. An organization of another tenant is
reported as not found.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from iam.dependencies.access import require_policies
from organizations.application.organization_service import OrganizationService
from organizations.dependencies import get_organization_service
from organizations.ports.exceptions import OrganizationNotFoundError
from organizations.presentation import policies
from organizations.presentation.models import (
    CreateOrganizationRequest,
    OrganizationResponse,
    UpdateOrganizationRequest,
)
from shared_kernel.auth import Principal

router = APIRouter(
    prefix="/organizations",
    tags=["organizations"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    request: CreateOrganizationRequest,
    _: Annotated[Principal, Depends(require_policies(policies.CREATE_ORGANIZATION))],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Create an organization in the caller's tenant.

    Raises:
        DuplicateConstraintError: 409 if the name is taken in the tenant
    """
    organization = await service.create_organization(
        name=request.name,
        description=request.description,
    )
    return OrganizationResponse.from_model(organization)


@router.get("")
async def list_organizations(
    _: Annotated[Principal, Depends(require_policies(policies.READ_ORGANIZATIONS))],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> list[OrganizationResponse]:
    """List the organizations of the caller's tenant."""
    organizations = await service.list_organizations()
    return [OrganizationResponse.from_model(o) for o in organizations]


@router.get("/{id}")
async def get_organization(
    id: int,
    _: Annotated[Principal, Depends(require_policies(policies.READ_ORGANIZATION))],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Get an organization by ID.

    Raises:
        HTTPException: 404 if missing or in another tenant
    """
    try:
        organization = await service.get_organization(id)
    except OrganizationNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Organization {id} not found",
        ) from e
    return OrganizationResponse.from_model(organization)


@router.patch("/{id}")
async def update_organization(
    id: int,
    request: UpdateOrganizationRequest,
    _: Annotated[Principal, Depends(require_policies(policies.UPDATE_ORGANIZATION))],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Update an organization's name or description.

    Raises:
        HTTPException: 404 if missing or in another tenant
        DuplicateConstraintError: 409 if the new name is taken in the tenant
    """
    try:
        organization = await service.update_organization(
            id,
            name=request.name,
            description=request.description,
        )
    except OrganizationNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Organization {id} not found",
        ) from e
    return OrganizationResponse.from_model(organization)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_organization(
    id: int,
    _: Annotated[Principal, Depends(require_policies(policies.DELETE_ORGANIZATION))],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> None:
    """Delete an organization.

    Raises:
        HTTPException: 404 if missing or in another tenant
    """
    try:
        await service.delete_organization(id)
    except OrganizationNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Organization {id} not found",
        ) from e
