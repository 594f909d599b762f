"""Turns a bearer credential into the request's principal.

The resolver is the only writer of the request context store: once a
principal is loaded, its tenant is bound for the rest of the request.
"""

from __future__ import annotations

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.ports.repositories import IUserRepository
from shared_kernel.auth.jwt_validator import InvalidTokenError, JWTValidator
from shared_kernel.auth.principal import Principal
from shared_kernel.exceptions import MissingTenantContextError, UnauthenticatedError
from shared_kernel.tenancy.context import RequestContextStore, TenantContext


class PrincipalResolver:
    """Resolves and binds the principal of one request."""

    def __init__(
        self,
        validator: JWTValidator,
        user_repository: IUserRepository,
        store: RequestContextStore,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize the resolver.

        Args:
            validator: Validates bearer tokens
            user_repository: Repository on an unscoped session
            store: Request context store to bind the tenant into
            probe: Optional domain probe for observability
        """
        self._validator = validator
        self._users = user_repository
        self._store = store
        self._probe = probe or DefaultAuthenticationProbe()

    async def resolve(self, token: str | None) -> Principal:
        """Validate ``token``, load its user and bind the user's tenant.

        Args:
            token: The raw bearer token, or None if the request had none

        Returns:
            The authenticated principal

        Raises:
            UnauthenticatedError: If the token is missing or invalid, the
                user no longer exists, or the user's tenant is deactivated
            MissingTenantContextError: If the user has no tenant
        """
        if not token:
            self._probe.authentication_failed("Missing bearer token")
            raise UnauthenticatedError("Missing bearer token")

        try:
            claims = self._validator.validate_token(token)
        except InvalidTokenError as e:
            self._probe.authentication_failed(str(e))
            raise

        principal = await self._users.load_principal(claims.user_id)
        if principal is None:
            self._probe.authentication_failed("User no longer exists")
            raise UnauthenticatedError("User no longer exists")

        if principal.tenant_id is None or principal.tenant_domain is None:
            raise MissingTenantContextError(
                f"User {principal.user_id} is not attached to a tenant"
            )
        if not principal.tenant_active:
            self._probe.authentication_failed("Tenant is deactivated")
            raise UnauthenticatedError("Tenant is deactivated")

        self._store.bind_tenant(
            TenantContext(tenant_id=principal.tenant_id, domain=principal.tenant_domain),
            user_id=principal.user_id,
        )
        self._probe.user_authenticated(principal.user_id, principal.tenant_id)
        return principal
