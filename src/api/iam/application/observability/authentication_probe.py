"""Domain probe for authentication operations.

Covers principal resolution for bearer tokens as well as local login
and self-service registration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for authentication operations."""

    def user_authenticated(self, user_id: int, tenant_id: int | None) -> None:
        """Record that a bearer token resolved to a principal."""
        ...

    def authentication_failed(self, reason: str) -> None:
        """Record that a request could not be authenticated."""
        ...

    def login_succeeded(self, user_id: int, username: str) -> None:
        """Record a successful username/password login."""
        ...

    def login_failed(self, username: str) -> None:
        """Record a failed username/password login."""
        ...

    def tenant_registered(self, tenant_id: int, domain: str, user_id: int) -> None:
        """Record that a new tenant and its first user were created."""
        ...

    def registration_rejected(self, field: str | None) -> None:
        """Record that a registration collided with existing data."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def user_authenticated(self, user_id: int, tenant_id: int | None) -> None:
        """Record that a bearer token resolved to a principal."""
        self._logger.info(
            "user_authenticated",
            principal_id=user_id,
            principal_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def authentication_failed(self, reason: str) -> None:
        """Record that a request could not be authenticated."""
        self._logger.warning(
            "authentication_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def login_succeeded(self, user_id: int, username: str) -> None:
        """Record a successful username/password login."""
        self._logger.info(
            "login_succeeded",
            principal_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def login_failed(self, username: str) -> None:
        """Record a failed username/password login."""
        self._logger.warning(
            "login_failed",
            username=username,
            **self._get_context_kwargs(),
        )

    def tenant_registered(self, tenant_id: int, domain: str, user_id: int) -> None:
        """Record that a new tenant and its first user were created."""
        self._logger.info(
            "tenant_registered",
            registered_tenant_id=tenant_id,
            domain=domain,
            registered_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def registration_rejected(self, field: str | None) -> None:
        """Record that a registration collided with existing data."""
        self._logger.warning(
            "registration_rejected",
            field=field,
            **self._get_context_kwargs(),
        )
