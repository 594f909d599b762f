"""Shared middleware for cross-cutting concerns.

Holds the ASGI middleware that opens the per-request tenant slot and the
exception handlers that map the shared error taxonomy to HTTP responses.
"""

from shared_kernel.middleware.errors import register_exception_handlers
from shared_kernel.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "register_exception_handlers",
]
