"""Unit tests for translating integrity errors into duplicate-constraint errors."""

from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from iam.infrastructure.models import UserModel
from infrastructure.database.exceptions import translate_integrity_error
from organizations.infrastructure.models import OrganizationModel


def _flush_error(engine: Engine, *entities: object) -> IntegrityError:
    with Session(engine) as session:
        session.add_all(entities)
        with pytest.raises(IntegrityError) as exc_info:
            session.flush()
        session.rollback()
    return exc_info.value


class _UniqueViolationError(Exception):
    """Shape of asyncpg's UniqueViolationError."""

    def __init__(self, constraint_name: str):
        super().__init__("duplicate key value violates unique constraint")
        self.constraint_name = constraint_name


class _AdaptedIntegrityError(Exception):
    """Shape of the DBAPI error SQLAlchemy's asyncpg adapter raises."""

    def __init__(self, sqlstate: str, cause: Exception | None = None):
        super().__init__(str(cause))
        self.sqlstate = sqlstate
        self.__cause__ = cause


def _wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, orig)


class TestSqliteErrors:
    """Tests against real SQLite constraint failures."""

    def test_unique_user_email(self, sqlite_engine: Engine, seeded) -> None:
        error = _flush_error(
            sqlite_engine,
            UserModel(
                username="alice2",
                email="alice@acme.io",
                password_hash="x",
                role_id=1,
                tenant_id=seeded.acme_id,
            ),
        )

        duplicate = translate_integrity_error(error)

        assert duplicate is not None
        assert duplicate.field == "email"

    def test_unique_organization_name_skips_tenant_column(
        self, sqlite_engine: Engine, seeded
    ) -> None:
        error = _flush_error(
            sqlite_engine, OrganizationModel(name="Widgets", tenant_id=seeded.acme_id)
        )

        duplicate = translate_integrity_error(error)

        assert duplicate is not None
        assert duplicate.field == "name"

    def test_not_null_is_not_translated(self, sqlite_engine: Engine, seeded) -> None:
        error = _flush_error(
            sqlite_engine, OrganizationModel(name=None, tenant_id=seeded.acme_id)
        )

        assert translate_integrity_error(error) is None

    def test_foreign_key_is_not_translated(self) -> None:
        error = _wrap(sqlite3.IntegrityError("FOREIGN KEY constraint failed"))

        assert translate_integrity_error(error) is None


class TestPostgresErrors:
    """Tests against the attributes PostgreSQL drivers expose."""

    def test_unique_violation_uses_constraint_name(self) -> None:
        orig = _AdaptedIntegrityError(
            "23505", _UniqueViolationError("uq_users_username")
        )

        duplicate = translate_integrity_error(_wrap(orig))

        assert duplicate is not None
        assert duplicate.field == "username"

    def test_value_in_message_does_not_pick_field(self) -> None:
        """Only the constraint name decides the field, never the row values."""
        cause = _UniqueViolationError("uq_tenants_domain")
        cause.args = ("Key (domain)=(email.example.com) already exists",)
        orig = _AdaptedIntegrityError("23505", cause)

        duplicate = translate_integrity_error(_wrap(orig))

        assert duplicate is not None
        assert duplicate.field == "domain"

    def test_unknown_constraint_name_has_no_field(self) -> None:
        orig = _AdaptedIntegrityError("23505", _UniqueViolationError("users_pkey"))

        duplicate = translate_integrity_error(_wrap(orig))

        assert duplicate is not None
        assert duplicate.field is None

    @pytest.mark.parametrize(
        "sqlstate",
        ["23502", "23503", "23514"],
        ids=["not_null", "foreign_key", "check"],
    )
    def test_other_violations_are_not_translated(self, sqlstate: str) -> None:
        orig = _AdaptedIntegrityError(sqlstate)

        assert translate_integrity_error(_wrap(orig)) is None
