"""Domain probe for request-scoped tenant context.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events around binding the tenant of a request and
the persistence hooks that rely on it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context resolution and use."""

    def tenant_bound(self, tenant_id: int, domain: str, user_id: int | None) -> None:
        """Record that a tenant was bound to the current request."""
        ...

    def tenant_rebind_rejected(self, bound_tenant_id: int, tenant_id: int) -> None:
        """Record that a second, conflicting bind was refused."""
        ...

    def tenant_context_missing(self, operation: str) -> None:
        """Record that an operation needed a tenant but none was bound."""
        ...

    def tenant_stamped(self, entity_type: str, tenant_id: int) -> None:
        """Record that a new entity was stamped with the request tenant."""
        ...

    def tenant_domain_normalized(self, label: str, domain: str) -> None:
        """Record that a tenant label was expanded to a full domain."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_bound(self, tenant_id: int, domain: str, user_id: int | None) -> None:
        self._logger.debug(
            "tenant_context_bound",
            bound_tenant_id=tenant_id,
            domain=domain,
            bound_user_id=user_id,
            **self._get_context_kwargs(),
        )

    def tenant_rebind_rejected(self, bound_tenant_id: int, tenant_id: int) -> None:
        self._logger.error(
            "tenant_context_rebind_rejected",
            bound_tenant_id=bound_tenant_id,
            attempted_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_context_missing(self, operation: str) -> None:
        self._logger.error(
            "tenant_context_missing",
            operation=operation,
            **self._get_context_kwargs(),
        )

    def tenant_stamped(self, entity_type: str, tenant_id: int) -> None:
        self._logger.debug(
            "tenant_stamped",
            entity_type=entity_type,
            stamped_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_domain_normalized(self, label: str, domain: str) -> None:
        self._logger.info(
            "tenant_domain_normalized",
            label=label,
            domain=domain,
            **self._get_context_kwargs(),
        )
