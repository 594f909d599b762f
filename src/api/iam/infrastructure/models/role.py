"""SQLAlchemy ORM model for the roles table."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from iam.infrastructure.models.permission import PermissionModel, role_permissions
from infrastructure.database.models import Base, BigIntegerPK, TimestampMixin


class RoleModel(Base, TimestampMixin):
    """ORM model for roles table.

    Roles are global reference data shared by every tenant.
    """

    __tablename__ = "roles"
    __table_args__ = (UniqueConstraint("name", name="uq_roles_name"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)

    permissions: Mapped[list[PermissionModel]] = relationship(
        secondary=role_permissions,
        lazy="selectin",
        order_by=PermissionModel.id,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<RoleModel(name={self.name})>"
