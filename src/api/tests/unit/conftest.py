"""Unit test fixtures with mocked dependencies."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from shared_kernel.auth.principal import Principal, RolePermission
from shared_kernel.authorization.types import Action, Subject, format_permission_name
from shared_kernel.tenancy import RequestContextStore


def make_permission(action: str, subject: str) -> RolePermission:
    """Build a permission row the way the seeder names it."""
    try:
        name = format_permission_name(Action(action), Subject(subject))
    except ValueError:
        name = f"{action}:{subject.lower()}"
    return RolePermission(name=name, action=action, subject=subject)


def make_principal(
    user_id: int = 7,
    tenant_id: int | None = 1,
    permissions: tuple[tuple[str, str], ...] = (),
    tenant_active: bool = True,
) -> Principal:
    return Principal(
        user_id=user_id,
        username=f"user{user_id}",
        email=f"user{user_id}@acme.io",
        tenant_id=tenant_id,
        tenant_domain="acme.example.com" if tenant_id is not None else None,
        role="user",
        tenant_active=tenant_active,
        permissions=tuple(make_permission(a, s) for a, s in permissions),
    )


def make_request(path: str = "/users/7", path_params: dict | None = None) -> Request:
    """Build a bare Starlette request carrying the given path parameters."""
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": path,
            "headers": [],
            "query_string": b"",
            "path_params": path_params or {},
        }
    )


@pytest.fixture
def mock_tenant_probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(mock_tenant_probe: MagicMock) -> RequestContextStore:
    """Request context store reporting to a mock probe."""
    return RequestContextStore(probe=mock_tenant_probe)


@pytest.fixture
def principal_factory():
    """Factory for principals holding the given (action, subject) pairs."""
    return make_principal


@pytest.fixture
def request_factory():
    """Factory for bare requests with path parameters."""
    return make_request
