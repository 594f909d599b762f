"""Integration tests for tenant isolation and route access classes."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.access import RouteAccess, session_for
from organizations.infrastructure.models import OrganizationModel


@pytest.fixture
def alice(register) -> dict[str, Any]:
    """A regular user of the acme tenant."""
    return register("alice", "acme")


@pytest.fixture
def bob(register) -> dict[str, Any]:
    """A regular user of the globex tenant."""
    return register("bob", "globex")


@pytest.fixture
def acme_org(client: TestClient, alice: dict[str, Any]) -> dict[str, Any]:
    response = client.post(
        "/organizations",
        json={"name": "Widgets", "description": "Acme's first org"},
        headers=alice["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestOrganizationScoping:
    """Tests that organizations never cross tenants."""

    def test_create_stamps_caller_tenant(
        self, client: TestClient, alice: dict[str, Any], bob: dict[str, Any]
    ) -> None:
        """A tenant id in the body is ignored in favour of the caller's."""
        response = client.post(
            "/organizations",
            json={"name": "Sneaky", "tenant_id": bob["tenant_id"]},
            headers=alice["headers"],
        )

        assert response.status_code == 201
        assert response.json()["tenant_id"] == alice["tenant_id"]

    def test_other_tenant_sees_not_found(
        self, client: TestClient, bob: dict[str, Any], acme_org: dict[str, Any]
    ) -> None:
        response = client.get(f"/organizations/{acme_org['id']}", headers=bob["headers"])

        assert response.status_code == 404

    def test_owner_can_read(
        self, client: TestClient, alice: dict[str, Any], acme_org: dict[str, Any]
    ) -> None:
        response = client.get(f"/organizations/{acme_org['id']}", headers=alice["headers"])

        assert response.status_code == 200
        assert response.json()["name"] == "Widgets"

    def test_list_only_shows_own_tenant(
        self,
        client: TestClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        acme_org: dict[str, Any],
    ) -> None:
        client.post("/organizations", json={"name": "Gizmos"}, headers=bob["headers"])

        alice_orgs = client.get("/organizations", headers=alice["headers"]).json()
        bob_orgs = client.get("/organizations", headers=bob["headers"]).json()

        assert [o["name"] for o in alice_orgs] == ["Widgets"]
        assert [o["name"] for o in bob_orgs] == ["Gizmos"]

    def test_other_tenant_cannot_update(
        self, client: TestClient, bob: dict[str, Any], acme_org: dict[str, Any]
    ) -> None:
        response = client.patch(
            f"/organizations/{acme_org['id']}",
            json={"name": "Hijacked"},
            headers=bob["headers"],
        )

        assert response.status_code == 404

    def test_admin_of_other_tenant_cannot_delete(
        self,
        client: TestClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        acme_org: dict[str, Any],
        make_admin,
    ) -> None:
        """Capabilities never reach across tenants."""
        make_admin("bob")

        response = client.delete(f"/organizations/{acme_org['id']}", headers=bob["headers"])

        assert response.status_code == 404
        still_there = client.get(
            f"/organizations/{acme_org['id']}", headers=alice["headers"]
        )
        assert still_there.status_code == 200

    def test_same_name_allowed_in_other_tenant(
        self, client: TestClient, bob: dict[str, Any], acme_org: dict[str, Any]
    ) -> None:
        response = client.post(
            "/organizations", json={"name": "Widgets"}, headers=bob["headers"]
        )

        assert response.status_code == 201

    def test_duplicate_name_in_tenant_is_409(
        self, client: TestClient, alice: dict[str, Any], acme_org: dict[str, Any]
    ) -> None:
        response = client.post(
            "/organizations", json={"name": "Widgets"}, headers=alice["headers"]
        )

        assert response.status_code == 409
        assert response.json()["field"] == "name"


class TestPolicies:
    """Tests for capability checks on routes."""

    def test_user_cannot_delete_organization(
        self, client: TestClient, alice: dict[str, Any], acme_org: dict[str, Any]
    ) -> None:
        response = client.delete(
            f"/organizations/{acme_org['id']}", headers=alice["headers"]
        )

        assert response.status_code == 403

    def test_admin_can_delete_organization(
        self,
        client: TestClient,
        alice: dict[str, Any],
        acme_org: dict[str, Any],
        make_admin,
    ) -> None:
        make_admin("alice")

        response = client.delete(
            f"/organizations/{acme_org['id']}", headers=alice["headers"]
        )

        assert response.status_code == 204
        gone = client.get(f"/organizations/{acme_org['id']}", headers=alice["headers"])
        assert gone.status_code == 404

    def test_read_own_user(self, client: TestClient, alice: dict[str, Any]) -> None:
        response = client.get(f"/users/{alice['id']}", headers=alice["headers"])

        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    def test_read_own_user_with_zero_padded_id(
        self, client: TestClient, alice: dict[str, Any]
    ) -> None:
        response = client.get(f"/users/0{alice['id']}", headers=alice["headers"])

        assert response.status_code == 200
        assert response.json()["id"] == alice["id"]

    def test_read_own_does_not_cover_others(
        self, client: TestClient, alice: dict[str, Any], bob: dict[str, Any]
    ) -> None:
        response = client.get(f"/users/{bob['id']}", headers=alice["headers"])

        assert response.status_code == 403

    def test_user_cannot_list_users(
        self, client: TestClient, alice: dict[str, Any]
    ) -> None:
        assert client.get("/users", headers=alice["headers"]).status_code == 403

    def test_update_own_user(self, client: TestClient, alice: dict[str, Any]) -> None:
        response = client.patch(
            f"/users/{alice['id']}",
            json={"email": "alice@wonderland.io"},
            headers=alice["headers"],
        )

        assert response.status_code == 200
        assert response.json()["email"] == "alice@wonderland.io"

    def test_update_to_taken_email_is_409(
        self,
        client: TestClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
    ) -> None:
        response = client.patch(
            f"/users/{alice['id']}",
            json={"email": "bob@globex.io"},
            headers=alice["headers"],
        )

        assert response.status_code == 409
        assert response.json()["field"] == "email"


class TestAdminAcrossTenants:
    """Tests for admins, whose grants still stop at the tenant boundary."""

    def test_admin_lists_only_own_tenant_users(
        self,
        client: TestClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        make_admin,
    ) -> None:
        make_admin("alice")

        users = client.get("/users", headers=alice["headers"]).json()

        assert [u["username"] for u in users] == ["alice"]

    def test_admin_reading_other_tenant_user_sees_not_found(
        self,
        client: TestClient,
        alice: dict[str, Any],
        bob: dict[str, Any],
        make_admin,
    ) -> None:
        make_admin("alice")

        response = client.get(f"/users/{bob['id']}", headers=alice["headers"])

        assert response.status_code == 404


class TestUnscopedRoutes:
    """Tests for authenticated routes that skip tenant scoping."""

    def test_roles_require_authentication(self, client: TestClient) -> None:
        assert client.get("/roles").status_code == 401

    def test_roles_require_capability(
        self, client: TestClient, alice: dict[str, Any]
    ) -> None:
        assert client.get("/roles", headers=alice["headers"]).status_code == 403

    def test_admin_lists_global_roles(
        self, client: TestClient, alice: dict[str, Any], make_admin
    ) -> None:
        make_admin("alice")

        response = client.get("/roles", headers=alice["headers"])

        assert response.status_code == 200
        roles = {role["name"]: role for role in response.json()}
        assert set(roles) == {"admin", "user"}
        user_permissions = {p["name"] for p in roles["user"]["permissions"]}
        assert "readOwn:user" in user_permissions


class TestRouteAccessSessions:
    """Tests for the session each access class hands to a route."""

    @pytest.fixture
    def both_orgs(self, client: TestClient, alice, bob) -> None:
        client.post("/organizations", json={"name": "Widgets"}, headers=alice["headers"])
        client.post("/organizations", json={"name": "Gizmos"}, headers=bob["headers"])

    @staticmethod
    def mount_listing(client: TestClient, path: str, access: RouteAccess) -> None:
        # Default-value form: annotations are strings and cannot see locals.
        session_dependency = Depends(session_for(access))

        @client.app.get(path)
        async def list_names(session: AsyncSession = session_dependency) -> list[str]:
            result = await session.execute(
                select(OrganizationModel.name).order_by(OrganizationModel.name)
            )
            return list(result.scalars().all())

    def test_public_session_needs_no_credential_and_is_unfiltered(
        self, client: TestClient, both_orgs
    ) -> None:
        self.mount_listing(client, "/probe/public", RouteAccess.PUBLIC)

        response = client.get("/probe/public")

        assert response.status_code == 200
        assert response.json() == ["Gizmos", "Widgets"]

    def test_skip_scope_session_requires_credential(self, client: TestClient) -> None:
        self.mount_listing(client, "/probe/unscoped", RouteAccess.SKIP_TENANT_SCOPE)

        assert client.get("/probe/unscoped").status_code == 401

    def test_skip_scope_session_is_unfiltered(
        self, client: TestClient, alice, both_orgs
    ) -> None:
        self.mount_listing(client, "/probe/unscoped", RouteAccess.SKIP_TENANT_SCOPE)

        response = client.get("/probe/unscoped", headers=alice["headers"])

        assert response.json() == ["Gizmos", "Widgets"]

    def test_scoped_session_is_filtered(
        self, client: TestClient, alice, both_orgs
    ) -> None:
        self.mount_listing(client, "/probe/scoped", RouteAccess.TENANT_SCOPED)

        response = client.get("/probe/scoped", headers=alice["headers"])

        assert response.json() == ["Widgets"]
