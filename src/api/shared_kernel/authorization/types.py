"""Authorization vocabulary.

Actions and subjects are closed enumerations. Permission rows store their
string values; anything outside these sets grants nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Action(StrEnum):
    """Operations a grant can permit.

    ``MANAGE`` is the wildcard: a grant of ``MANAGE`` on a subject permits
    every action on that subject.
    """

    MANAGE = "manage"
    CREATE = "create"
    CREATE_ANY = "createAny"
    CREATE_ONE = "createOne"
    CREATE_OWN = "createOwn"
    READ = "read"
    READ_ANY = "readAny"
    READ_ONE = "readOne"
    READ_OWN = "readOwn"
    UPDATE = "update"
    UPDATE_ANY = "updateAny"
    UPDATE_ONE = "updateOne"
    UPDATE_OWN = "updateOwn"
    DELETE = "delete"
    DELETE_ANY = "deleteAny"
    DELETE_ONE = "deleteOne"
    DELETE_OWN = "deleteOwn"


class Subject(StrEnum):
    """Resource kinds that grants apply to."""

    USER = "User"
    ROLE = "Role"
    PERMISSION = "Permission"
    ORGANIZATION = "Organization"
    TENANT = "Tenant"


@dataclass(frozen=True)
class Grant:
    """A single (action, subject) pair held by a principal."""

    action: Action
    subject: Subject

    def permits(self, action: Action, subject: Subject) -> bool:
        """Whether this grant allows ``action`` on ``subject``."""
        if self.subject != subject:
            return False
        return self.action == Action.MANAGE or self.action == action


def format_permission_name(action: Action, subject: Subject) -> str:
    """Canonical permission name stored alongside the action and subject.

    Example:
        >>> format_permission_name(Action.READ_ANY, Subject.USER)
        "readAny:user"
    """
    return f"{action}:{subject.lower()}"
