"""Integration test fixtures.

Each test gets a fresh application backed by an in-memory SQLite
database. The schema is created and reference data seeded by the
application's own lifespan, so everything runs on the TestClient's
event loop.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from iam.dependencies.authentication import get_jwt_validator
from iam.infrastructure.models import TenantModel
from iam.infrastructure.role_repository import RoleRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_sessionmaker
from infrastructure.settings import (
    get_auth_settings,
    get_database_settings,
    get_tenancy_settings,
)

PASSWORD = "correct horse battery"


def _clear_settings_caches() -> None:
    get_database_settings.cache_clear()
    get_auth_settings.cache_clear()
    get_tenancy_settings.cache_clear()
    get_jwt_validator.cache_clear()


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """A running application on a fresh in-memory database."""
    monkeypatch.setenv("TENANTGATE_DB_URL", "sqlite+aiosqlite://")
    monkeypatch.setenv("TENANTGATE_DB_AUTO_CREATE_SCHEMA", "true")
    monkeypatch.setenv("TENANTGATE_TENANT_ROOT_DOMAIN", "example.com")
    monkeypatch.setenv("TENANTGATE_AUTH_JWT_SECRET", "integration-secret")
    _clear_settings_caches()

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client

    _clear_settings_caches()


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register a user and return its id, tenant id and auth headers."""

    def _register(username: str, tenant: str) -> dict[str, Any]:
        response = client.post(
            "/auth/register",
            json={
                "username": username,
                "email": f"{username}@{tenant}.io",
                "password": PASSWORD,
                "tenant": tenant,
            },
        )
        assert response.status_code == 201, response.text
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

        profile = client.get("/auth/profile", headers=headers)
        assert profile.status_code == 200, profile.text
        body = profile.json()
        return {"id": body["id"], "tenant_id": body["tenant_id"], "headers": headers}

    return _register


async def _set_role(username: str, role_name: str) -> None:
    async with get_sessionmaker()() as session:
        async with session.begin():
            role = await RoleRepository(session).get_by_name(role_name)
            user = await UserRepository(session).get_by_username(username)
            user.role_id = role.id


async def _set_tenant_active(domain: str, is_active: bool) -> None:
    async with get_sessionmaker()() as session:
        async with session.begin():
            result = await session.execute(
                select(TenantModel).where(TenantModel.domain == domain)
            )
            result.scalar_one().is_active = is_active


async def _tenant_domains() -> list[str]:
    async with get_sessionmaker()() as session:
        result = await session.execute(select(TenantModel.domain).order_by(TenantModel.id))
        return list(result.scalars().all())


@pytest.fixture
def make_admin(client: TestClient) -> Callable[[str], None]:
    """Give an existing user the admin role, bypassing the API."""

    def _make_admin(username: str) -> None:
        client.portal.call(_set_role, username, "admin")

    return _make_admin


@pytest.fixture
def deactivate_tenant(client: TestClient) -> Callable[[str], None]:
    def _deactivate(domain: str) -> None:
        client.portal.call(_set_tenant_active, domain, False)

    return _deactivate


@pytest.fixture
def tenant_domains(client: TestClient) -> Callable[[], list[str]]:
    def _domains() -> list[str]:
        return client.portal.call(_tenant_domains)

    return _domains
