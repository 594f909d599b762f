"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and makes
application services testable with mocks.
"""

from iam.ports.exceptions import (
    InvalidCredentialsError,
    ReferenceDataMissingError,
    UserNotFoundError,
)
from iam.ports.repositories import IRoleRepository, ITenantRepository, IUserRepository

__all__ = [
    "IRoleRepository",
    "ITenantRepository",
    "IUserRepository",
    "InvalidCredentialsError",
    "ReferenceDataMissingError",
    "UserNotFoundError",
]
