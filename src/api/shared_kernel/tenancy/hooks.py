"""Before-persist hooks that depend on tenancy.

Both factories return plain callables suitable for
``PersistHookRegistry.register``. They run once for every newly created
entity of the class they are registered against.
"""

from __future__ import annotations

from typing import Any, Callable

from shared_kernel.exceptions import MissingTenantContextError
from shared_kernel.tenancy.context import RequestContextStore
from shared_kernel.tenancy.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)


def qualify_domain(label: str, root_domain: str) -> str:
    """Expand a tenant label into its full domain.

    Args:
        label: Bare tenant label as submitted (e.g. ``acme``)
        root_domain: Configured root domain (e.g. ``example.com``)

    Returns:
        ``<label>.<root_domain>``, with the label kept as given
    """
    return f"{label}.{root_domain}"


def stamp_tenant(
    store: RequestContextStore,
    probe: TenantContextProbe | None = None,
) -> Callable[[Any], None]:
    """Build a hook that writes the request tenant onto new entities.

    Any tenant id already present on the entity is overwritten; callers
    never choose the tenant of what they create.

    Raises:
        MissingTenantContextError: From the hook, when no tenant is bound
    """
    probe = probe or DefaultTenantContextProbe()

    def _stamp(entity: Any) -> None:
        tenant = store.get_tenant()
        if tenant is None:
            probe.tenant_context_missing(f"stamp {type(entity).__name__}")
            raise MissingTenantContextError(
                f"Cannot create {type(entity).__name__} without a tenant context"
            )
        entity.tenant_id = tenant.tenant_id
        probe.tenant_stamped(type(entity).__name__, tenant.tenant_id)

    return _stamp


def normalize_tenant_domain(
    root_domain: str,
    probe: TenantContextProbe | None = None,
) -> Callable[[Any], None]:
    """Build a hook that turns a submitted tenant label into a full domain.

    Applied once at creation. The hook does not detect values that are
    already qualified.
    """
    probe = probe or DefaultTenantContextProbe()

    def _normalize(entity: Any) -> None:
        label = entity.domain
        entity.domain = qualify_domain(label, root_domain)
        probe.tenant_domain_normalized(label, entity.domain)

    return _normalize
