"""Fixtures for persistence tests against an in-memory SQLite database."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from iam.infrastructure.models import RoleModel, TenantModel, UserModel
from infrastructure.database.models import Base
from organizations.infrastructure.models import OrganizationModel


@dataclass
class SeededIds:
    acme_id: int
    globex_id: int
    acme_org_id: int
    globex_org_id: int
    alice_id: int
    bob_id: int


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded(sqlite_engine: Engine) -> SeededIds:
    """Two tenants, each with one user and one organization.

    Rows are written directly, with no hooks or scoping attached.
    """
    with Session(sqlite_engine) as session:
        role = RoleModel(name="user")
        acme = TenantModel(domain="acme.example.com")
        globex = TenantModel(domain="globex.example.com")
        session.add_all([role, acme, globex])
        session.flush()

        alice = UserModel(
            username="alice",
            email="alice@acme.io",
            password_hash="x",
            role_id=role.id,
            tenant_id=acme.id,
        )
        bob = UserModel(
            username="bob",
            email="bob@globex.io",
            password_hash="x",
            role_id=role.id,
            tenant_id=globex.id,
        )
        acme_org = OrganizationModel(name="Widgets", tenant_id=acme.id)
        globex_org = OrganizationModel(name="Gadgets", tenant_id=globex.id)
        session.add_all([alice, bob, acme_org, globex_org])
        session.commit()

        return SeededIds(
            acme_id=acme.id,
            globex_id=globex.id,
            acme_org_id=acme_org.id,
            globex_org_id=globex_org.id,
            alice_id=alice.id,
            bob_id=bob.id,
        )
