"""Database infrastructure: engine, sessions, persist hooks and tenant scoping."""

from infrastructure.database.exceptions import translate_integrity_error
from infrastructure.database.hooks import PersistHook, PersistHookRegistry
from infrastructure.database.models import Base, TenantOwnedMixin, TimestampMixin
from infrastructure.database.tenant_scope import TenantScopeFilter

__all__ = [
    "Base",
    "PersistHook",
    "PersistHookRegistry",
    "TenantOwnedMixin",
    "TenantScopeFilter",
    "TimestampMixin",
    "translate_integrity_error",
]
