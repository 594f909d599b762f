"""SQLAlchemy repository for organizations."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import translate_integrity_error
from organizations.infrastructure.models import OrganizationModel
from organizations.ports.repositories import IOrganizationRepository


class OrganizationRepository(IOrganizationRepository):
    """Repository for OrganizationModel rows.

    Carries no tenant logic of its own; the session's tenant scope and the
    stamping hook do all of it.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, organization_id: int) -> OrganizationModel | None:
        stmt = select(OrganizationModel).where(OrganizationModel.id == organization_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[OrganizationModel]:
        stmt = select(OrganizationModel).order_by(OrganizationModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        stmt = select(OrganizationModel).where(OrganizationModel.name == name)
        if exclude_id is not None:
            stmt = stmt.where(OrganizationModel.id != exclude_id)
        result = await self._session.execute(stmt)
        return result.scalars().first() is not None

    async def save(self, organization: OrganizationModel) -> OrganizationModel:
        self._session.add(organization)
        try:
            await self._session.flush()
        except IntegrityError as e:
            duplicate = translate_integrity_error(e)
            if duplicate is None:
                raise
            raise duplicate from e
        return organization

    async def delete(self, organization: OrganizationModel) -> None:
        await self._session.delete(organization)
        await self._session.flush()
