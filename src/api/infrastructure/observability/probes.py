"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PersistenceProbe(Protocol):
    """Domain probe for session lifecycle, persist hooks and tenant scoping.

    This probe captures domain-significant events related to the database
    layer without exposing logging implementation details.
    """

    def engine_created(self, target: str) -> None:
        """Record that a database engine was created."""
        ...

    def engine_disposed(self) -> None:
        """Record that the database engine was disposed."""
        ...

    def schema_created(self, tables: list[str]) -> None:
        """Record that tables were created on startup."""
        ...

    def persist_hooks_ran(self, entity_type: str, hook_count: int) -> None:
        """Record that before-persist hooks ran for a new entity."""
        ...

    def persist_hook_failed(self, entity_type: str, error: Exception) -> None:
        """Record that a before-persist hook raised, aborting the flush."""
        ...

    def tenant_scope_installed(self, tenant_id: int) -> None:
        """Record that a session was restricted to one tenant."""
        ...

    def tenant_scope_reinstall_rejected(self, installed: int, requested: int) -> None:
        """Record that a second scope install on one session was refused."""
        ...

    def with_context(self, context: ObservationContext) -> PersistenceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPersistenceProbe:
    """Default implementation of PersistenceProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultPersistenceProbe:
        """Create a new probe with observation context bound."""
        return DefaultPersistenceProbe(logger=self._logger, context=context)

    def engine_created(self, target: str) -> None:
        self._logger.info(
            "database_engine_created",
            target=target,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self) -> None:
        self._logger.info(
            "database_engine_disposed",
            **self._get_context_kwargs(),
        )

    def schema_created(self, tables: list[str]) -> None:
        self._logger.info(
            "database_schema_created",
            tables=tables,
            **self._get_context_kwargs(),
        )

    def persist_hooks_ran(self, entity_type: str, hook_count: int) -> None:
        self._logger.debug(
            "persist_hooks_ran",
            entity_type=entity_type,
            hook_count=hook_count,
            **self._get_context_kwargs(),
        )

    def persist_hook_failed(self, entity_type: str, error: Exception) -> None:
        self._logger.error(
            "persist_hook_failed",
            entity_type=entity_type,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def tenant_scope_installed(self, tenant_id: int) -> None:
        self._logger.debug(
            "tenant_scope_installed",
            scoped_tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_scope_reinstall_rejected(self, installed: int, requested: int) -> None:
        self._logger.error(
            "tenant_scope_reinstall_rejected",
            installed_tenant_id=installed,
            requested_tenant_id=requested,
            **self._get_context_kwargs(),
        )
