"""Read access to roles and their permissions."""

from __future__ import annotations

from iam.infrastructure.models import RoleModel
from iam.ports.repositories import IRoleRepository


class RoleService:
    """Application service listing global reference roles."""

    def __init__(self, role_repository: IRoleRepository):
        self._role_repository = role_repository

    async def list_roles(self) -> list[RoleModel]:
        return await self._role_repository.list_all()
