"""Service dependencies for the IAM bounded context."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from iam.application.services import AuthService, RoleService, UserService
from iam.dependencies.access import RouteAccess, session_for
from iam.dependencies.authentication import (
    get_authentication_probe,
    get_jwt_validator,
)
from iam.infrastructure.role_repository import RoleRepository
from iam.infrastructure.tenant_repository import TenantRepository
from iam.infrastructure.user_repository import UserRepository
from infrastructure.settings import get_auth_settings, get_tenancy_settings
from shared_kernel.auth import JWTValidator


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance."""
    return DefaultUserServiceProbe()


def get_auth_service(
    session: Annotated[AsyncSession, Depends(session_for(RouteAccess.PUBLIC))],
    token_issuer: Annotated[JWTValidator, Depends(get_jwt_validator)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> AuthService:
    """Get AuthService instance on a public (unfiltered) session."""
    tenancy = get_tenancy_settings()
    return AuthService(
        session=session,
        user_repository=UserRepository(session),
        tenant_repository=TenantRepository(session),
        role_repository=RoleRepository(session),
        token_issuer=token_issuer,
        root_domain=tenancy.root_domain,
        default_role=tenancy.default_role,
        token_ttl_seconds=get_auth_settings().access_token_ttl_seconds,
        probe=probe,
    )


def get_user_service(
    session: Annotated[AsyncSession, Depends(session_for(RouteAccess.TENANT_SCOPED))],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance on the tenant-scoped session."""
    return UserService(
        user_repository=UserRepository(session),
        session=session,
        probe=probe,
    )


def get_role_service(
    session: Annotated[
        AsyncSession, Depends(session_for(RouteAccess.SKIP_TENANT_SCOPE))
    ],
) -> RoleService:
    """Get RoleService instance on an authenticated, unscoped session."""
    return RoleService(role_repository=RoleRepository(session))
