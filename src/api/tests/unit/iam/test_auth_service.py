"""Unit tests for AuthService login and registration guards."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.application.security import hash_password, verify_password
from iam.application.services import AuthService
from iam.application.value_objects import Registration
from iam.ports.exceptions import InvalidCredentialsError
from shared_kernel.auth import JWTValidator
from shared_kernel.exceptions import DuplicateConstraintError


class _Transaction:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.begin.return_value = _Transaction()
    return session


@pytest.fixture
def repositories() -> SimpleNamespace:
    return SimpleNamespace(users=AsyncMock(), tenants=AsyncMock(), roles=AsyncMock())


@pytest.fixture
def validator() -> JWTValidator:
    return JWTValidator(secret="auth-secret", probe=MagicMock())


@pytest.fixture
def auth_probe() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(
    session: MagicMock,
    repositories: SimpleNamespace,
    validator: JWTValidator,
    auth_probe: MagicMock,
) -> AuthService:
    return AuthService(
        session=session,
        user_repository=repositories.users,
        tenant_repository=repositories.tenants,
        role_repository=repositories.roles,
        token_issuer=validator,
        root_domain="example.com",
        default_role="user",
        token_ttl_seconds=3600,
        probe=auth_probe,
    )


def stored_user(password: str = "correct horse", active: bool = True) -> SimpleNamespace:
    return SimpleNamespace(
        id=7,
        username="alice",
        password_hash=hash_password(password),
        tenant=SimpleNamespace(is_active=active),
    )


class TestPasswordHashing:
    """Tests for bcrypt helpers."""

    def test_hash_verifies(self) -> None:
        hashed = hash_password("correct horse")

        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_malformed_hash_does_not_verify(self) -> None:
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestLogin:
    """Tests for AuthService.login."""

    @pytest.mark.asyncio
    async def test_issues_token_for_valid_credentials(
        self,
        service: AuthService,
        repositories: SimpleNamespace,
        validator: JWTValidator,
    ) -> None:
        repositories.users.get_by_username.return_value = stored_user()

        token = await service.login("alice", "correct horse")

        assert token.token_type == "bearer"
        assert token.expires_in == 3600
        assert validator.validate_token(token.access_token).user_id == 7

    @pytest.mark.asyncio
    async def test_unknown_user_rejected(
        self, service: AuthService, repositories: SimpleNamespace, auth_probe: MagicMock
    ) -> None:
        repositories.users.get_by_username.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await service.login("nobody", "correct horse")
        auth_probe.login_failed.assert_called_once_with("nobody")

    @pytest.mark.asyncio
    async def test_wrong_password_rejected(
        self, service: AuthService, repositories: SimpleNamespace
    ) -> None:
        repositories.users.get_by_username.return_value = stored_user()

        with pytest.raises(InvalidCredentialsError):
            await service.login("alice", "wrong horse")

    @pytest.mark.asyncio
    async def test_inactive_tenant_rejected(
        self, service: AuthService, repositories: SimpleNamespace
    ) -> None:
        repositories.users.get_by_username.return_value = stored_user(active=False)

        with pytest.raises(InvalidCredentialsError):
            await service.login("alice", "correct horse")


class TestRegisterGuards:
    """Tests for registration conflicts detected before any insert."""

    @pytest.mark.asyncio
    async def test_taken_username_rejected(
        self, service: AuthService, repositories: SimpleNamespace
    ) -> None:
        repositories.users.find_conflict.return_value = "username"

        with pytest.raises(DuplicateConstraintError) as exc_info:
            await service.register(
                Registration("alice", "alice@acme.io", "correct horse", "acme")
            )

        assert exc_info.value.field == "username"
        repositories.tenants.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_taken_domain_rejected(
        self, service: AuthService, repositories: SimpleNamespace
    ) -> None:
        repositories.users.find_conflict.return_value = None
        repositories.tenants.get_by_domain.return_value = SimpleNamespace(id=1)

        with pytest.raises(DuplicateConstraintError) as exc_info:
            await service.register(
                Registration("alice", "alice@acme.io", "correct horse", "Acme")
            )

        assert exc_info.value.field == "domain"
        repositories.tenants.get_by_domain.assert_awaited_once_with("Acme.example.com")
