"""Composition root for persistence.

Declares which models are tenant-owned and registers the before-persist
hooks that depend on tenancy. Infrastructure knows nothing about the
bounded contexts; this module is where they meet.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from iam.infrastructure.models import TenantModel, UserModel
from infrastructure.database.dependencies import init_database
from infrastructure.database.hooks import PersistHookRegistry
from infrastructure.database.tenant_scope import TenantScopeFilter
from infrastructure.settings import get_tenancy_settings
from organizations.infrastructure.models import OrganizationModel
from shared_kernel.tenancy import (
    RequestContextStore,
    get_request_context_store,
    normalize_tenant_domain,
    stamp_tenant,
)

TENANT_OWNED_MODELS: tuple[type, ...] = (UserModel, OrganizationModel)

# Users are created during registration, before any tenant is bound.
STAMPED_MODELS: tuple[type, ...] = tuple(
    model for model in TENANT_OWNED_MODELS if model is not UserModel
)


@lru_cache
def get_tenant_scope_filter() -> TenantScopeFilter:
    """Get the process-wide tenant scope filter."""
    return TenantScopeFilter(TENANT_OWNED_MODELS)


def build_persist_hooks(
    store: RequestContextStore,
    root_domain: str,
) -> PersistHookRegistry:
    """Register the tenancy hooks.

    Args:
        store: Request context store the stamping hook reads from
        root_domain: Root domain tenant labels are qualified with

    Returns:
        A registry ready to attach to a sessionmaker
    """
    registry = PersistHookRegistry()
    registry.register(TenantModel, normalize_tenant_domain(root_domain))
    for model in STAMPED_MODELS:
        registry.register(model, stamp_tenant(store))
    return registry


def init_persistence(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """Initialize the shared session factory with every hook and filter attached.

    Args:
        engine: Engine to use instead of one built from settings

    Returns:
        The shared session factory
    """
    hooks = build_persist_hooks(
        get_request_context_store(),
        get_tenancy_settings().root_domain,
    )
    return init_database(hooks, get_tenant_scope_filter(), engine=engine)
