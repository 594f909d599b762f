"""Observability for shared middleware operations."""

from shared_kernel.middleware.observability.error_probe import (
    DefaultErrorBoundaryProbe,
    ErrorBoundaryProbe,
)

__all__ = [
    "DefaultErrorBoundaryProbe",
    "ErrorBoundaryProbe",
]
