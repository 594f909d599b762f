"""HTTP routes for roles.

Roles are global reference data, so these routes require authentication
but skip tenant scoping.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from iam.application.services import RoleService
from iam.dependencies.access import require_policies
from iam.dependencies.user import get_role_service
from iam.presentation.roles.models import RoleResponse
from shared_kernel.auth import Principal
from shared_kernel.authorization import Action, Subject, can

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
)


@router.get("")
async def list_roles(
    _: Annotated[Principal, Depends(require_policies(can(Action.READ_ANY, Subject.ROLE)))],
    service: Annotated[RoleService, Depends(get_role_service)],
) -> list[RoleResponse]:
    """List every role with its permissions."""
    roles = await service.list_roles()
    return [RoleResponse.from_model(role) for role in roles]
