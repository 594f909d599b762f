"""Local registration and login.

Registration is the only way a tenant comes into existence: it creates
the tenant and its first user together.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from iam.application.observability import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.security import hash_password, verify_password
from iam.application.value_objects import AccessToken, Registration
from iam.infrastructure.models import TenantModel, UserModel
from iam.ports.exceptions import InvalidCredentialsError, ReferenceDataMissingError
from iam.ports.repositories import IRoleRepository, ITenantRepository, IUserRepository
from shared_kernel.auth.jwt_validator import JWTValidator
from shared_kernel.exceptions import DuplicateConstraintError
from shared_kernel.tenancy.hooks import qualify_domain


class AuthService:
    """Application service for registration and login."""

    def __init__(
        self,
        session: AsyncSession,
        user_repository: IUserRepository,
        tenant_repository: ITenantRepository,
        role_repository: IRoleRepository,
        token_issuer: JWTValidator,
        root_domain: str,
        default_role: str,
        token_ttl_seconds: int,
        probe: AuthenticationProbe | None = None,
    ):
        """Initialize AuthService with dependencies.

        Args:
            session: Unscoped database session
            user_repository: Repository for user persistence
            tenant_repository: Repository for tenant persistence
            role_repository: Repository for role lookup
            token_issuer: Signs access tokens
            root_domain: Root domain tenant labels are qualified with
            default_role: Role given to self-registered users
            token_ttl_seconds: Lifetime reported with issued tokens
            probe: Optional domain probe for observability
        """
        self._session = session
        self._users = user_repository
        self._tenants = tenant_repository
        self._roles = role_repository
        self._token_issuer = token_issuer
        self._root_domain = root_domain
        self._default_role = default_role
        self._token_ttl_seconds = token_ttl_seconds
        self._probe = probe or DefaultAuthenticationProbe()

    async def register(self, registration: Registration) -> AccessToken:
        """Create a tenant and its first user, then log the user in.

        Args:
            registration: Username, email, password and tenant label

        Returns:
            An access token for the new user

        Raises:
            DuplicateConstraintError: If username, email or domain is taken
            ReferenceDataMissingError: If the default role was never seeded
        """
        domain = qualify_domain(registration.tenant_label, self._root_domain)

        async with self._session.begin():
            conflict = await self._users.find_conflict(
                username=registration.username,
                email=registration.email,
            )
            if conflict is None and await self._tenants.get_by_domain(domain):
                conflict = "domain"
            if conflict is not None:
                self._probe.registration_rejected(conflict)
                raise DuplicateConstraintError(f"{conflict} already exists", field=conflict)

            role = await self._roles.get_by_name(self._default_role)
            if role is None:
                raise ReferenceDataMissingError(
                    f"Default role '{self._default_role}' has not been seeded"
                )

            # The label is qualified by the normalization hook on flush.
            tenant = await self._tenants.save(
                TenantModel(domain=registration.tenant_label, is_active=True)
            )
            user = await self._users.save(
                UserModel(
                    username=registration.username,
                    email=registration.email,
                    password_hash=hash_password(registration.password),
                    role_id=role.id,
                    tenant_id=tenant.id,
                )
            )

        self._probe.tenant_registered(tenant.id, tenant.domain, user.id)
        return self._issue(user.id, user.username)

    async def login(self, username: str, password: str) -> AccessToken:
        """Exchange a username and password for an access token.

        Raises:
            InvalidCredentialsError: If the pair does not match an active user
        """
        user = await self._users.get_by_username(username)
        if (
            user is None
            or not verify_password(password, user.password_hash)
            or not user.tenant.is_active
        ):
            self._probe.login_failed(username)
            raise InvalidCredentialsError("Invalid username or password")

        self._probe.login_succeeded(user.id, user.username)
        return self._issue(user.id, user.username)

    def _issue(self, user_id: int, username: str) -> AccessToken:
        return AccessToken(
            access_token=self._token_issuer.issue_token(user_id, username),
            expires_in=self._token_ttl_seconds,
        )
