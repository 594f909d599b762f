"""Domain probe for errors reaching the request boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ErrorBoundaryProbe(Protocol):
    """Domain probe for errors mapped to HTTP responses."""

    def request_rejected(
        self,
        status_code: int,
        error_type: str,
        path: str,
        message: str,
    ) -> None:
        """Record that a request ended in a client-facing error."""
        ...

    def tenant_invariant_violated(self, path: str, message: str) -> None:
        """Record that tenant context was required but not available."""
        ...

    def with_context(self, context: ObservationContext) -> ErrorBoundaryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultErrorBoundaryProbe:
    """Default implementation of ErrorBoundaryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultErrorBoundaryProbe:
        """Create a new probe with observation context bound."""
        return DefaultErrorBoundaryProbe(logger=self._logger, context=context)

    def request_rejected(
        self,
        status_code: int,
        error_type: str,
        path: str,
        message: str,
    ) -> None:
        self._logger.info(
            "request_rejected",
            status_code=status_code,
            error_type=error_type,
            path=path,
            message=message,
            **self._get_context_kwargs(),
        )

    def tenant_invariant_violated(self, path: str, message: str) -> None:
        # Always a wiring defect, never caller input.
        self._logger.error(
            "tenant_invariant_violated",
            path=path,
            message=message,
            **self._get_context_kwargs(),
        )
