"""User application service for IAM bounded context.

Runs on the request's tenant-scoped session, so every operation is
confined to the caller's tenant without any explicit tenant checks.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.application.security import hash_password
from iam.application.value_objects import UserChanges
from iam.infrastructure.models import UserModel
from iam.ports.exceptions import UserNotFoundError
from iam.ports.repositories import IUserRepository


class UserService:
    """Application service for user management."""

    def __init__(
        self,
        user_repository: IUserRepository,
        session: AsyncSession,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._session = session
        self._probe = probe or DefaultUserServiceProbe()

    async def list_users(self) -> list[UserModel]:
        users = await self._user_repository.list_all()
        self._probe.users_listed(len(users))
        return users

    async def get_user(self, user_id: int) -> UserModel:
        """Fetch one user of the caller's tenant.

        Raises:
            UserNotFoundError: If the user is missing or in another tenant
        """
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            self._probe.user_not_found(user_id)
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def update_user(self, user_id: int, changes: UserChanges) -> UserModel:
        """Apply a partial update to a user.

        Raises:
            UserNotFoundError: If the user is missing or in another tenant
            DuplicateConstraintError: If the new username or email is taken
        """
        async with self._session.begin():
            user = await self.get_user(user_id)
            if changes.username is not None:
                user.username = changes.username
            if changes.email is not None:
                user.email = changes.email
            if changes.password is not None:
                user.password_hash = hash_password(changes.password)
            await self._user_repository.save(user)

        self._probe.user_updated(user_id, changes.changed_fields())
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user of the caller's tenant.

        Raises:
            UserNotFoundError: If the user is missing or in another tenant
        """
        async with self._session.begin():
            user = await self.get_user(user_id)
            await self._user_repository.delete(user)

        self._probe.user_deleted(user_id)
