"""Abilities: what a principal may do.

An ability is derived from the permissions of the principal's role each
time it is needed, so a change to role permissions takes effect on the
next request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from shared_kernel.authorization.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from shared_kernel.authorization.types import Action, Grant, Subject

if TYPE_CHECKING:
    from shared_kernel.auth.principal import Principal


class Ability:
    """An immutable set of grants."""

    def __init__(self, grants: Iterable[Grant] = ()) -> None:
        self._grants = frozenset(grants)

    @property
    def grants(self) -> frozenset[Grant]:
        return self._grants

    def can(self, action: Action, subject: Subject) -> bool:
        """Whether any grant permits ``action`` on ``subject``."""
        return any(grant.permits(action, subject) for grant in self._grants)

    def cannot(self, action: Action, subject: Subject) -> bool:
        return not self.can(action, subject)

    def __repr__(self) -> str:
        pairs = sorted(f"{g.action}:{g.subject}" for g in self._grants)
        return f"Ability({', '.join(pairs)})"


class AbilityFactory:
    """Builds an Ability from a principal's role permissions.

    Permission rows whose action or subject falls outside the known
    vocabulary grant nothing and are reported through the probe.
    """

    def __init__(self, probe: AuthorizationProbe | None = None) -> None:
        self._probe = probe or DefaultAuthorizationProbe()

    def create_for(self, principal: Principal) -> Ability:
        """Derive the ability of ``principal``.

        Args:
            principal: The authenticated principal

        Returns:
            The principal's ability; empty when the role has no permissions
        """
        grants: list[Grant] = []
        for permission in principal.permissions:
            try:
                grant = Grant(Action(permission.action), Subject(permission.subject))
            except ValueError:
                self._probe.unknown_permission_ignored(
                    principal.user_id,
                    permission.name,
                    permission.action,
                    permission.subject,
                )
                continue
            grants.append(grant)

        ability = Ability(grants)
        self._probe.ability_built(principal.user_id, len(ability.grants))
        return ability
