"""SQLAlchemy repository for roles and permissions (global reference data)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import PermissionModel, RoleModel
from iam.ports.repositories import IRoleRepository


class RoleRepository(IRoleRepository):
    """Repository for RoleModel and PermissionModel rows."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_name(self, name: str) -> RoleModel | None:
        stmt = select(RoleModel).where(RoleModel.name == name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[RoleModel]:
        stmt = select(RoleModel).order_by(RoleModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_permission(self, name: str) -> PermissionModel | None:
        stmt = select(PermissionModel).where(PermissionModel.name == name)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_permissions(self) -> list[PermissionModel]:
        stmt = select(PermissionModel).order_by(PermissionModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def add(self, model: RoleModel | PermissionModel) -> None:
        self._session.add(model)
        await self._session.flush()
