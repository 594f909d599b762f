"""SQLAlchemy ORM models for permissions and the role/permission link table."""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, String, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, BigIntegerPK, TimestampMixin

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        BigIntegerPK,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        BigIntegerPK,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class PermissionModel(Base, TimestampMixin):
    """ORM model for permissions table.

    Global reference data. ``action`` and ``subject`` hold raw strings so
    that rows written by other tools load even if they name something
    unknown; such rows grant nothing.
    """

    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("name", name="uq_permissions_name"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    subject: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<PermissionModel(name={self.name})>"
