"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user, tenant and role repository
operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def user_saved(self, user_id: int, username: str) -> None:
        """Record that a user was successfully saved."""
        ...

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was deleted."""
        ...

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found (or is outside the tenant)."""
        ...

    def duplicate_user(self, field: str | None) -> None:
        """Record that a user write hit a uniqueness rule."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_saved(self, tenant_id: int, domain: str) -> None:
        """Record that a tenant was successfully saved."""
        ...

    def duplicate_tenant_domain(self, domain: str) -> None:
        """Record that a tenant domain is already taken."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_saved(self, user_id: int, username: str) -> None:
        """Record that a user was successfully saved."""
        self._logger.info(
            "user_saved",
            saved_user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            deleted_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            requested_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def duplicate_user(self, field: str | None) -> None:
        """Record that a user write hit a uniqueness rule."""
        self._logger.warning(
            "duplicate_user",
            field=field,
            **self._get_context_kwargs(),
        )


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_saved(self, tenant_id: int, domain: str) -> None:
        """Record that a tenant was successfully saved."""
        self._logger.info(
            "tenant_saved",
            saved_tenant_id=tenant_id,
            domain=domain,
            **self._get_context_kwargs(),
        )

    def duplicate_tenant_domain(self, domain: str) -> None:
        """Record that a tenant domain is already taken."""
        self._logger.warning(
            "duplicate_tenant_domain",
            domain=domain,
            **self._get_context_kwargs(),
        )
