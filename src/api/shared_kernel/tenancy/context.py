"""Request-scoped tenant context.

Every inbound request gets its own slot, opened by
``RequestContextMiddleware`` before any handler runs and discarded when the
request finishes. The slot lives in a ``contextvars.ContextVar`` so it
follows the request across awaits and into tasks spawned from it, while
concurrent requests never observe each other's values.

The slot is write-once: the principal resolver binds the tenant after
authentication, and any later bind of a different tenant is an error.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Iterator

import structlog

from shared_kernel.exceptions import (
    MissingTenantContextError,
    TenantContextAlreadyBoundError,
)
from shared_kernel.tenancy.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)


@dataclass(frozen=True)
class TenantContext:
    """Tenant bound to the current request.

    Attributes:
        tenant_id: Identifier of the authenticated principal's tenant
        domain: The tenant's full domain (e.g. ``acme.example.com``)
    """

    tenant_id: int
    domain: str


class _RequestSlot:
    """Mutable per-request storage. Only the store touches it."""

    __slots__ = ("tenant", "user_id")

    def __init__(self) -> None:
        self.tenant: TenantContext | None = None
        self.user_id: int | None = None


_current_slot: ContextVar[_RequestSlot | None] = ContextVar(
    "tenantgate_request_slot", default=None
)


class RequestContextStore:
    """Access to the tenant bound to the request being served.

    The store itself holds no state; every instance reads and writes the
    slot of the current execution context.
    """

    def __init__(self, probe: TenantContextProbe | None = None) -> None:
        self._probe = probe or DefaultTenantContextProbe()

    @contextmanager
    def request_scope(self) -> Iterator[None]:
        """Open a fresh, empty slot for the duration of the block.

        Nested scopes shadow the outer one and restore it on exit.
        """
        token = _current_slot.set(_RequestSlot())
        try:
            yield
        finally:
            _current_slot.reset(token)

    @property
    def in_request(self) -> bool:
        """Whether a request scope is open in the current context."""
        return _current_slot.get() is not None

    def bind_tenant(self, tenant: TenantContext, user_id: int | None = None) -> None:
        """Bind the request's tenant.

        Binding the same tenant twice is a no-op so that several
        dependencies may resolve the principal within one request.

        Args:
            tenant: The tenant of the authenticated principal
            user_id: The authenticated user, recorded for log correlation

        Raises:
            MissingTenantContextError: If no request scope is open
            TenantContextAlreadyBoundError: If a different tenant is bound
        """
        slot = _current_slot.get()
        if slot is None:
            self._probe.tenant_context_missing("bind_tenant")
            raise MissingTenantContextError(
                "No request scope is open; is RequestContextMiddleware installed?"
            )

        if slot.tenant is not None:
            if slot.tenant.tenant_id == tenant.tenant_id:
                return
            self._probe.tenant_rebind_rejected(
                bound_tenant_id=slot.tenant.tenant_id,
                tenant_id=tenant.tenant_id,
            )
            raise TenantContextAlreadyBoundError(
                f"Request is already bound to tenant {slot.tenant.tenant_id}"
            )

        slot.tenant = tenant
        slot.user_id = user_id
        structlog.contextvars.bind_contextvars(
            tenant_id=tenant.tenant_id,
            user_id=user_id,
        )
        self._probe.tenant_bound(tenant.tenant_id, tenant.domain, user_id)

    def get_tenant(self) -> TenantContext | None:
        """Return the bound tenant, or None outside a request or before binding."""
        slot = _current_slot.get()
        if slot is None:
            return None
        return slot.tenant

    def get_user_id(self) -> int | None:
        """Return the user recorded alongside the tenant, if any."""
        slot = _current_slot.get()
        if slot is None:
            return None
        return slot.user_id

    def require_tenant(self) -> TenantContext:
        """Return the bound tenant.

        Raises:
            MissingTenantContextError: If no tenant has been bound
        """
        tenant = self.get_tenant()
        if tenant is None:
            self._probe.tenant_context_missing("require_tenant")
            raise MissingTenantContextError("No tenant is bound to the current request")
        return tenant


_default_store = RequestContextStore()


def get_request_context_store() -> RequestContextStore:
    """Get the process-wide request context store."""
    return _default_store
