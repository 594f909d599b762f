"""SQLAlchemy repository for users.

The repository works on whatever session it is given. On a request
session with a tenant scope installed, every lookup is silently limited
to that tenant, so a user of another tenant reads as missing.
"""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import UserModel
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.repositories import IUserRepository
from infrastructure.database.exceptions import translate_integrity_error
from shared_kernel.auth.principal import Principal, RolePermission


class UserRepository(IUserRepository):
    """Repository for UserModel rows."""

    def __init__(
        self,
        session: AsyncSession,
        probe: UserRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Fetch a user with role, permissions and tenant loaded.

        Args:
            user_id: The user's id

        Returns:
            The user, or None if missing or outside the session's tenant
        """
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.user_not_found(user_id)
        return model

    async def get_by_username(self, username: str) -> UserModel | None:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> list[UserModel]:
        """List users visible to the session, oldest first."""
        stmt = select(UserModel).order_by(UserModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def find_conflict(
        self,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> str | None:
        """Return the first field already taken by another user, if any.

        Must run on an unscoped session to see users of every tenant.
        """
        clauses = []
        if username is not None:
            clauses.append(UserModel.username == username)
        if email is not None:
            clauses.append(UserModel.email == email)
        if not clauses:
            return None

        stmt = select(UserModel).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        result = await self._session.execute(stmt)
        for model in result.scalars():
            if username is not None and model.username == username:
                return "username"
            if email is not None and model.email == email:
                return "email"
        return None

    async def save(self, user: UserModel) -> UserModel:
        """Add or update a user and flush.

        Raises:
            DuplicateConstraintError: If username or email is taken
        """
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            duplicate = translate_integrity_error(e)
            if duplicate is None:
                raise
            self._probe.duplicate_user(duplicate.field)
            raise duplicate from e

        self._probe.user_saved(user.id, user.username)
        return user

    async def delete(self, user: UserModel) -> None:
        user_id = user.id
        await self._session.delete(user)
        await self._session.flush()
        self._probe.user_deleted(user_id)

    async def load_principal(self, user_id: int) -> Principal | None:
        """Load the principal for ``user_id``.

        Args:
            user_id: Id taken from a validated token

        Returns:
            The principal, or None if the user no longer exists
        """
        model = await self.get_by_id(user_id)
        if model is None:
            return None

        permissions = tuple(
            RolePermission(name=p.name, action=p.action, subject=p.subject)
            for p in model.role.permissions
        )
        return Principal(
            user_id=model.id,
            username=model.username,
            email=model.email,
            tenant_id=model.tenant_id,
            tenant_domain=model.tenant.domain if model.tenant is not None else None,
            role=model.role.name,
            tenant_active=model.tenant.is_active if model.tenant is not None else False,
            permissions=permissions,
        )
