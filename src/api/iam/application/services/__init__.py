"""Application services for IAM bounded context."""

from iam.application.services.auth_service import AuthService
from iam.application.services.principal_resolver import PrincipalResolver
from iam.application.services.reference_data import ReferenceDataService
from iam.application.services.role_service import RoleService
from iam.application.services.user_service import UserService

__all__ = [
    "AuthService",
    "PrincipalResolver",
    "ReferenceDataService",
    "RoleService",
    "UserService",
]
