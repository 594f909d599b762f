"""Domain probe for organization service operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrganizationServiceProbe(Protocol):
    """Domain probe for organization application service operations."""

    def organization_created(self, organization_id: int, tenant_id: int, name: str) -> None:
        """Record that an organization was created."""
        ...

    def organization_updated(self, organization_id: int) -> None:
        """Record that an organization was updated."""
        ...

    def organization_deleted(self, organization_id: int) -> None:
        """Record that an organization was deleted."""
        ...

    def organization_not_found(self, organization_id: int) -> None:
        """Record that an organization was missing or in another tenant."""
        ...

    def duplicate_organization_name(self, name: str) -> None:
        """Record that an organization name is taken in the tenant."""
        ...

    def with_context(self, context: ObservationContext) -> OrganizationServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOrganizationServiceProbe:
    """Default implementation of OrganizationServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultOrganizationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrganizationServiceProbe(logger=self._logger, context=context)

    def organization_created(self, organization_id: int, tenant_id: int, name: str) -> None:
        self._logger.info(
            "organization_created",
            organization_id=organization_id,
            owning_tenant_id=tenant_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def organization_updated(self, organization_id: int) -> None:
        self._logger.info(
            "organization_updated",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def organization_deleted(self, organization_id: int) -> None:
        self._logger.info(
            "organization_deleted",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def organization_not_found(self, organization_id: int) -> None:
        self._logger.info(
            "organization_not_found",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def duplicate_organization_name(self, name: str) -> None:
        self._logger.warning(
            "duplicate_organization_name",
            name=name,
            **self._get_context_kwargs(),
        )
