"""Policies guarding the organization endpoints."""

from shared_kernel.authorization import Action, Subject, any_of, can

CREATE_ORGANIZATION = can(Action.CREATE, Subject.ORGANIZATION)
READ_ORGANIZATIONS = can(Action.READ_ANY, Subject.ORGANIZATION)
READ_ORGANIZATION = any_of(
    can(Action.READ_ONE, Subject.ORGANIZATION),
    can(Action.READ_ANY, Subject.ORGANIZATION),
)
UPDATE_ORGANIZATION = can(Action.UPDATE, Subject.ORGANIZATION)
DELETE_ORGANIZATION = can(Action.DELETE, Subject.ORGANIZATION)
