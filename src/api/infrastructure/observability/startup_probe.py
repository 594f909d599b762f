"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_started(self, version: str) -> None:
        """Record that the application finished starting."""
        ...

    def reference_role_created(self, name: str, permission_count: int) -> None:
        """Record that a reference role was created at startup."""
        ...

    def reference_permission_created(self, name: str) -> None:
        """Record that a reference permission was created at startup."""
        ...

    def reference_data_ready(self, roles: int, permissions: int) -> None:
        """Record that roles and permissions are present and linked."""
        ...

    def application_stopped(self) -> None:
        """Record that the application shut down."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, version: str) -> None:
        self._logger.info(
            "application_started",
            version=version,
            **self._get_context_kwargs(),
        )

    def reference_role_created(self, name: str, permission_count: int) -> None:
        self._logger.info(
            "reference_role_created",
            name=name,
            permission_count=permission_count,
            **self._get_context_kwargs(),
        )

    def reference_permission_created(self, name: str) -> None:
        self._logger.info(
            "reference_permission_created",
            name=name,
            **self._get_context_kwargs(),
        )

    def reference_data_ready(self, roles: int, permissions: int) -> None:
        self._logger.info(
            "reference_data_ready",
            roles=roles,
            permissions=permissions,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
