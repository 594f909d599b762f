"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface application services depend on.
Implementations live in ``iam.infrastructure``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from iam.infrastructure.models import (
        PermissionModel,
        RoleModel,
        TenantModel,
        UserModel,
    )
    from shared_kernel.auth.principal import Principal


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for user persistence.

    Results depend on the session the repository was built with: a
    tenant-scoped session only ever sees its own tenant's users.
    """

    async def get_by_id(self, user_id: int) -> UserModel | None:
        """Retrieve a user by id, or None if missing or out of scope."""
        ...

    async def get_by_username(self, username: str) -> UserModel | None:
        """Retrieve a user by username."""
        ...

    async def list_all(self) -> list[UserModel]:
        """List every user visible to the session."""
        ...

    async def find_conflict(
        self,
        username: str | None = None,
        email: str | None = None,
        exclude_id: int | None = None,
    ) -> str | None:
        """Return the name of the first unique field already in use."""
        ...

    async def save(self, user: UserModel) -> UserModel:
        """Persist a new or modified user.

        Raises:
            DuplicateConstraintError: If username or email is taken
        """
        ...

    async def delete(self, user: UserModel) -> None:
        """Delete a user."""
        ...

    async def load_principal(self, user_id: int) -> Principal | None:
        """Build the principal of a user, or None if the user is gone."""
        ...


@runtime_checkable
class ITenantRepository(Protocol):
    """Repository for tenant persistence."""

    async def get_by_domain(self, domain: str) -> TenantModel | None:
        """Retrieve a tenant by its qualified domain."""
        ...

    async def save(self, tenant: TenantModel) -> TenantModel:
        """Persist a new tenant.

        Raises:
            DuplicateConstraintError: If the domain is taken
        """
        ...


@runtime_checkable
class IRoleRepository(Protocol):
    """Repository for roles and permissions."""

    async def get_by_name(self, name: str) -> RoleModel | None:
        """Retrieve a role by name."""
        ...

    async def list_all(self) -> list[RoleModel]:
        """List every role with its permissions."""
        ...

    async def get_permission(self, name: str) -> PermissionModel | None:
        """Retrieve a permission by name."""
        ...

    async def list_permissions(self) -> list[PermissionModel]:
        """List every permission."""
        ...

    async def add(self, model: RoleModel | PermissionModel) -> None:
        """Persist a new role or permission."""
        ...
