"""Tenant context shared by every bounded context."""

from shared_kernel.tenancy.context import (
    RequestContextStore,
    TenantContext,
    get_request_context_store,
)
from shared_kernel.tenancy.hooks import (
    normalize_tenant_domain,
    qualify_domain,
    stamp_tenant,
)
from shared_kernel.tenancy.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)

__all__ = [
    "DefaultTenantContextProbe",
    "RequestContextStore",
    "TenantContext",
    "TenantContextProbe",
    "get_request_context_store",
    "normalize_tenant_domain",
    "qualify_domain",
    "stamp_tenant",
]
