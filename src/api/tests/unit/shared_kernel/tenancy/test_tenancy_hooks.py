"""Unit tests for the tenant stamping and domain normalization hooks."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from shared_kernel.exceptions import MissingTenantContextError
from shared_kernel.tenancy import (
    RequestContextStore,
    TenantContext,
    normalize_tenant_domain,
    qualify_domain,
    stamp_tenant,
)


class TestQualifyDomain:
    """Tests for expanding tenant labels."""

    def test_appends_root_domain(self) -> None:
        assert qualify_domain("acme", "example.com") == "acme.example.com"

    def test_keeps_label_as_given(self) -> None:
        assert qualify_domain("AcMe", "example.com") == "AcMe.example.com"


class TestStampTenant:
    """Tests for the tenant stamping hook."""

    def test_writes_bound_tenant(self, store: RequestContextStore) -> None:
        hook = stamp_tenant(store, probe=MagicMock())
        entity = SimpleNamespace(tenant_id=None)

        with store.request_scope():
            store.bind_tenant(TenantContext(tenant_id=1, domain="acme.example.com"))
            hook(entity)

        assert entity.tenant_id == 1

    def test_overrides_caller_supplied_tenant(self, store: RequestContextStore) -> None:
        """A tenant id set by the caller should never survive stamping."""
        hook = stamp_tenant(store, probe=MagicMock())
        entity = SimpleNamespace(tenant_id=99)

        with store.request_scope():
            store.bind_tenant(TenantContext(tenant_id=1, domain="acme.example.com"))
            hook(entity)

        assert entity.tenant_id == 1

    def test_raises_without_bound_tenant(self, store: RequestContextStore) -> None:
        probe = MagicMock()
        hook = stamp_tenant(store, probe=probe)
        entity = SimpleNamespace(tenant_id=None)

        with store.request_scope():
            with pytest.raises(MissingTenantContextError):
                hook(entity)

        assert entity.tenant_id is None
        probe.tenant_context_missing.assert_called_once()

    def test_raises_outside_request(self, store: RequestContextStore) -> None:
        hook = stamp_tenant(store, probe=MagicMock())

        with pytest.raises(MissingTenantContextError):
            hook(SimpleNamespace(tenant_id=None))


class TestNormalizeTenantDomain:
    """Tests for the domain normalization hook."""

    def test_qualifies_label(self) -> None:
        probe = MagicMock()
        hook = normalize_tenant_domain("example.com", probe=probe)
        tenant = SimpleNamespace(domain="acme")

        hook(tenant)

        assert tenant.domain == "acme.example.com"
        probe.tenant_domain_normalized.assert_called_once_with("acme", "acme.example.com")
