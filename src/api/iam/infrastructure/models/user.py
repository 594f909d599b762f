"""SQLAlchemy ORM model for the users table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import (
    Base,
    BigIntegerPK,
    TenantOwnedMixin,
    TimestampMixin,
)

if TYPE_CHECKING:
    from iam.infrastructure.models.role import RoleModel
    from iam.infrastructure.models.tenant import TenantModel


class UserModel(Base, TenantOwnedMixin, TimestampMixin):
    """ORM model for users table.

    Usernames and emails are unique across all tenants, which lets login
    find a user before any tenant is known.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role_id: Mapped[int] = mapped_column(
        BigIntegerPK,
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
    )

    role: Mapped[RoleModel] = relationship(lazy="selectin")
    tenant: Mapped[TenantModel] = relationship(back_populates="users", lazy="selectin")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, username={self.username})>"
