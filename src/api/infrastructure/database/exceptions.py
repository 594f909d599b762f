"""Translation of database driver errors into the shared error taxonomy."""

from __future__ import annotations

import re

from sqlalchemy.exc import IntegrityError

from shared_kernel.exceptions import DuplicateConstraintError

UNIQUE_VIOLATION_SQLSTATE = "23505"

_SQLITE_UNIQUE_PREFIX = "UNIQUE constraint failed: "

# Constraint names follow uq_<table>_<field>; table names carry no underscore.
_CONSTRAINT_NAME = re.compile(r"^uq_[^_]+_(?P<field>\w+)$")


def _sqlstate(orig: BaseException | None) -> str | None:
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(orig: BaseException | None) -> str | None:
    # asyncpg raises UniqueViolationError as the cause of the adapted error;
    # psycopg carries it on ``diag``.
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
        diag = getattr(candidate, "diag", None)
        if diag is not None and getattr(diag, "constraint_name", None):
            return diag.constraint_name
    return None


def _field_from_constraint(name: str | None) -> str | None:
    if name is None:
        return None
    match = _CONSTRAINT_NAME.match(name)
    return match.group("field") if match else None


def _field_from_sqlite_message(message: str) -> str | None:
    # "UNIQUE constraint failed: organizations.tenant_id, organizations.name"
    columns = [
        column.strip().rsplit(".", 1)[-1]
        for column in message[len(_SQLITE_UNIQUE_PREFIX):].split(",")
    ]
    fields = [column for column in columns if column != "tenant_id"]
    return fields[-1] if fields else None


def translate_integrity_error(error: IntegrityError) -> DuplicateConstraintError | None:
    """Turn a unique-constraint violation into a DuplicateConstraintError.

    Only uniqueness violations are translated. NOT NULL, foreign-key and
    check failures return None and the caller re-raises the original
    error.

    Args:
        error: The IntegrityError raised on flush

    Returns:
        A DuplicateConstraintError naming the offending field when it can
        be identified, or None if the error is not a unique violation
    """
    orig = error.orig
    if _sqlstate(orig) == UNIQUE_VIOLATION_SQLSTATE:
        field = _field_from_constraint(_constraint_name(orig))
    elif str(orig).startswith(_SQLITE_UNIQUE_PREFIX):
        field = _field_from_sqlite_message(str(orig))
    else:
        return None

    if field is None:
        return DuplicateConstraintError("Duplicate value violates a unique constraint")
    return DuplicateConstraintError(f"{field} already exists", field=field)
