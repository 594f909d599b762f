"""Domain probe for authorization operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to ability construction and policy
evaluation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthorizationProbe(Protocol):
    """Domain probe for authorization operations."""

    def ability_built(self, user_id: int, grant_count: int) -> None:
        """Record that an ability was built for a principal."""
        ...

    def unknown_permission_ignored(
        self,
        user_id: int,
        name: str,
        action: str,
        subject: str,
    ) -> None:
        """Record that a stored permission named an unknown action or subject."""
        ...

    def policy_denied(self, user_id: int, policy: str, path: str) -> None:
        """Record that a policy denied a request."""
        ...

    def policies_granted(self, user_id: int, policy_count: int, path: str) -> None:
        """Record that every policy on a route passed."""
        ...

    def with_context(self, context: ObservationContext) -> AuthorizationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthorizationProbe:
    """Default implementation of AuthorizationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAuthorizationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthorizationProbe(logger=self._logger, context=context)

    def ability_built(self, user_id: int, grant_count: int) -> None:
        self._logger.debug(
            "ability_built",
            principal_id=user_id,
            grant_count=grant_count,
            **self._get_context_kwargs(),
        )

    def unknown_permission_ignored(
        self,
        user_id: int,
        name: str,
        action: str,
        subject: str,
    ) -> None:
        self._logger.warning(
            "unknown_permission_ignored",
            principal_id=user_id,
            permission_name=name,
            action=action,
            subject=subject,
            **self._get_context_kwargs(),
        )

    def policy_denied(self, user_id: int, policy: str, path: str) -> None:
        self._logger.info(
            "policy_denied",
            principal_id=user_id,
            policy=policy,
            path=path,
            **self._get_context_kwargs(),
        )

    def policies_granted(self, user_id: int, policy_count: int, path: str) -> None:
        self._logger.debug(
            "policies_granted",
            principal_id=user_id,
            policy_count=policy_count,
            path=path,
            **self._get_context_kwargs(),
        )
