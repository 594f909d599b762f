"""Policies guarding the user endpoints."""

from shared_kernel.authorization import Action, Subject, can, can_any_or_own

READ_USERS = can(Action.READ_ANY, Subject.USER)
READ_USER = can_any_or_own(Action.READ_ANY, Action.READ_OWN, Subject.USER)
UPDATE_USER = can_any_or_own(Action.UPDATE_ANY, Action.UPDATE_OWN, Subject.USER)
DELETE_USER = can_any_or_own(Action.DELETE_ANY, Action.DELETE_OWN, Subject.USER)
