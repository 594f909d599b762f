"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors raised by IAM application
services. Routes translate them into HTTP responses.
"""

from shared_kernel.exceptions import UnauthenticatedError


class UserNotFoundError(Exception):
    """Raised when a user does not exist or belongs to another tenant.

    Both cases are reported identically so callers cannot probe other
    tenants for ids.
    """

    pass


class InvalidCredentialsError(UnauthenticatedError):
    """Raised when a username/password pair does not match."""

    pass


class ReferenceDataMissingError(Exception):
    """Raised when a required role has not been seeded."""

    pass
