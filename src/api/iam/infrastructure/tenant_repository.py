"""SQLAlchemy repository for tenants."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import TenantModel
from iam.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from iam.ports.repositories import ITenantRepository
from infrastructure.database.exceptions import translate_integrity_error


class TenantRepository(ITenantRepository):
    """Repository for TenantModel rows.

    Tenants are not tenant-owned, so the tenant scope never applies here.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def get_by_domain(self, domain: str) -> TenantModel | None:
        """Fetch a tenant by its fully qualified domain."""
        stmt = select(TenantModel).where(TenantModel.domain == domain)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, tenant: TenantModel) -> TenantModel:
        """Add a tenant and flush.

        The domain normalization hook runs during the flush, so
        ``tenant.domain`` is qualified once this returns.

        Raises:
            DuplicateConstraintError: If the domain is taken
        """
        self._session.add(tenant)
        try:
            await self._session.flush()
        except IntegrityError as e:
            duplicate = translate_integrity_error(e)
            if duplicate is None:
                raise
            self._probe.duplicate_tenant_domain(tenant.domain)
            raise duplicate from e

        self._probe.tenant_saved(tenant.id, tenant.domain)
        return tenant
