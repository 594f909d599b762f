"""Bearer token authentication dependencies."""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.services import PrincipalResolver
from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.dependencies import get_principal_session
from infrastructure.settings import get_auth_settings
from shared_kernel.auth import JWTValidator, Principal
from shared_kernel.auth.observability import DefaultJWTValidatorProbe
from shared_kernel.tenancy import RequestContextStore, get_request_context_store

# auto_error=False so a missing header surfaces as UnauthenticatedError
bearer_scheme = HTTPBearer(auto_error=False, description="Access token from /auth/login")


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached JWT validator configured from auth settings.

    Returns:
        JWTValidator instance used both to issue and to validate tokens.
    """
    settings = get_auth_settings()
    return JWTValidator(
        secret=settings.jwt_secret.get_secret_value(),
        probe=DefaultJWTValidatorProbe(),
        algorithm=settings.jwt_algorithm,
        issuer=settings.issuer,
        ttl=timedelta(seconds=settings.access_token_ttl_seconds),
    )


def get_authentication_probe() -> AuthenticationProbe:
    """Get authentication probe for observability."""
    return DefaultAuthenticationProbe()


def get_principal_resolver(
    session: Annotated[AsyncSession, Depends(get_principal_session)],
    validator: Annotated[JWTValidator, Depends(get_jwt_validator)],
    store: Annotated[RequestContextStore, Depends(get_request_context_store)],
    probe: Annotated[AuthenticationProbe, Depends(get_authentication_probe)],
) -> PrincipalResolver:
    """Build a resolver on the dedicated principal session."""
    return PrincipalResolver(
        validator=validator,
        user_repository=UserRepository(session),
        store=store,
        probe=probe,
    )


async def get_current_principal(
    request: Request,
    resolver: Annotated[PrincipalResolver, Depends(get_principal_resolver)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> Principal:
    """Authenticate the request and attach its principal.

    FastAPI caches the result per request, so every dependency that needs
    the principal shares one resolution.

    Raises:
        UnauthenticatedError: If the credential is missing or invalid
    """
    token = credentials.credentials if credentials is not None else None
    principal = await resolver.resolve(token)
    request.state.principal = principal
    return principal
