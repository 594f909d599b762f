"""Seeding of roles and permissions.

Runs once at startup. Missing permissions and roles are created and
missing links added; nothing is ever removed, so running it again is a
no-op.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import PermissionModel, RoleModel
from iam.ports.repositories import IRoleRepository
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from shared_kernel.authorization.types import Action, Subject, format_permission_name

ADMIN_ROLE = "admin"
USER_ROLE = "user"

DEFAULT_ROLE_GRANTS: dict[str, tuple[tuple[Action, Subject], ...]] = {
    ADMIN_ROLE: tuple((Action.MANAGE, subject) for subject in Subject),
    USER_ROLE: (
        (Action.READ_OWN, Subject.USER),
        (Action.UPDATE_OWN, Subject.USER),
        (Action.CREATE, Subject.ORGANIZATION),
        (Action.READ_ANY, Subject.ORGANIZATION),
        (Action.READ_ONE, Subject.ORGANIZATION),
        (Action.UPDATE, Subject.ORGANIZATION),
    ),
}


class ReferenceDataService:
    """Ensures the default roles and permissions exist."""

    def __init__(
        self,
        session: AsyncSession,
        role_repository: IRoleRepository,
        probe: StartupProbe | None = None,
        role_grants: dict[str, tuple[tuple[Action, Subject], ...]] | None = None,
    ):
        self._session = session
        self._roles = role_repository
        self._probe = probe or DefaultStartupProbe()
        self._role_grants = role_grants or DEFAULT_ROLE_GRANTS

    async def ensure_reference_data(self) -> None:
        """Create whatever default roles, permissions and links are missing."""
        async with self._session.begin():
            permissions = {p.name: p for p in await self._roles.list_permissions()}

            for role_name, grants in self._role_grants.items():
                wanted: list[PermissionModel] = []
                for action, subject in grants:
                    name = format_permission_name(action, subject)
                    permission = permissions.get(name)
                    if permission is None:
                        permission = PermissionModel(
                            name=name,
                            action=str(action),
                            subject=str(subject),
                        )
                        await self._roles.add(permission)
                        permissions[name] = permission
                        self._probe.reference_permission_created(name)
                    wanted.append(permission)

                role = await self._roles.get_by_name(role_name)
                if role is None:
                    await self._roles.add(RoleModel(name=role_name, permissions=wanted))
                    self._probe.reference_role_created(role_name, len(wanted))
                    continue

                for permission in wanted:
                    if permission not in role.permissions:
                        role.permissions.append(permission)

        self._probe.reference_data_ready(
            roles=len(self._role_grants),
            permissions=len(permissions),
        )
