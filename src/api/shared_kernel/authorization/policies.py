"""Route policies.

A policy is a plain callable ``(ability, principal, request) -> bool``.
Routes declare an ordered list of them; all must pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

from starlette.requests import Request

from shared_kernel.authorization.ability import Ability
from shared_kernel.authorization.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from shared_kernel.authorization.types import Action, Subject
from shared_kernel.exceptions import ForbiddenError

if TYPE_CHECKING:
    from shared_kernel.auth.principal import Principal

Policy = Callable[[Ability, "Principal", Request], bool]


def policy_name(policy: Policy) -> str:
    return getattr(policy, "__name__", repr(policy))


def can(action: Action, subject: Subject) -> Policy:
    """Policy passing when the ability permits ``action`` on ``subject``."""

    def _policy(ability: Ability, principal: Principal, request: Request) -> bool:
        return ability.can(action, subject)

    _policy.__name__ = f"can({action}, {subject})"
    return _policy


def can_any_or_own(
    any_action: Action,
    own_action: Action,
    subject: Subject,
    param: str = "id",
) -> Policy:
    """Policy for routes addressing one resource by path parameter.

    Passes when the ability holds ``any_action``, or when it holds
    ``own_action`` and the path parameter ``param`` parses to the
    principal's own user id.
    """

    def _policy(ability: Ability, principal: Principal, request: Request) -> bool:
        if ability.can(any_action, subject):
            return True
        if not ability.can(own_action, subject):
            return False
        try:
            target_id = int(request.path_params.get(param))
        except (TypeError, ValueError):
            return False
        return target_id == principal.user_id

    _policy.__name__ = f"can_any_or_own({any_action}, {own_action}, {subject})"
    return _policy


def any_of(*policies: Policy) -> Policy:
    """Policy passing when at least one of ``policies`` passes."""

    def _policy(ability: Ability, principal: Principal, request: Request) -> bool:
        return any(p(ability, principal, request) for p in policies)

    _policy.__name__ = f"any_of({', '.join(policy_name(p) for p in policies)})"
    return _policy


class PolicyEvaluator:
    """Evaluates a route's policies in order, stopping at the first denial."""

    def __init__(self, probe: AuthorizationProbe | None = None) -> None:
        self._probe = probe or DefaultAuthorizationProbe()

    def first_denial(
        self,
        policies: Sequence[Policy],
        ability: Ability,
        principal: Principal,
        request: Request,
    ) -> Policy | None:
        """Return the first policy that denies, or None if all pass."""
        for policy in policies:
            if not policy(ability, principal, request):
                return policy
        return None

    def evaluate(
        self,
        policies: Sequence[Policy],
        ability: Ability,
        principal: Principal,
        request: Request,
    ) -> bool:
        """Return True when every policy passes. An empty list always passes.

        Denials are reported to the probe.
        """
        denied = self.first_denial(policies, ability, principal, request)
        if denied is not None:
            self._probe.policy_denied(
                principal.user_id, policy_name(denied), request.url.path
            )
            return False
        self._probe.policies_granted(principal.user_id, len(policies), request.url.path)
        return True

    def enforce(
        self,
        policies: Sequence[Policy],
        ability: Ability,
        principal: Principal,
        request: Request,
    ) -> None:
        """Raise unless every policy passes.

        Raises:
            ForbiddenError: If any policy denies
        """
        if not self.evaluate(policies, ability, principal, request):
            raise ForbiddenError("Forbidden")
