"""SQLAlchemy ORM model for the tenants table.

Tenants are the top-level isolation boundary. Every user and
organization belongs to exactly one tenant.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, BigIntegerPK, TimestampMixin

if TYPE_CHECKING:
    from iam.infrastructure.models.user import UserModel


class TenantModel(Base, TimestampMixin):
    """ORM model for tenants table.

    ``domain`` is submitted as a bare label and expanded to
    ``<label>.<root domain>`` by a before-persist hook, so it is globally
    unique in its qualified form.
    """

    __tablename__ = "tenants"
    __table_args__ = (UniqueConstraint("domain", name="uq_tenants_domain"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    domain: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    users: Mapped[list[UserModel]] = relationship(
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TenantModel(id={self.id}, domain={self.domain})>"
