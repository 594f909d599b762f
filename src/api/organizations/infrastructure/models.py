"""SQLAlchemy ORM model for the organizations table."""

from __future__ import annotations

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    BigIntegerPK,
    TenantOwnedMixin,
    TimestampMixin,
)


class OrganizationModel(Base, TenantOwnedMixin, TimestampMixin):
    """ORM model for organizations table.

    Tenant-owned: ``tenant_id`` is stamped on creation and every query is
    scoped to the caller's tenant. Names are unique within a tenant.
    """

    __tablename__ = "organizations"
    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_organizations_name"),
    )

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<OrganizationModel(id={self.id}, name={self.name})>"
