"""Unit tests for application settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from infrastructure.database.engines import build_async_url
from infrastructure.settings import AuthSettings, DatabaseSettings, TenancySettings

SECRET = "unit-test-secret"


class TestDatabaseSettings:
    """Tests for database settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TENANTGATE_DB_URL", raising=False)
        settings = DatabaseSettings(_env_file=None)

        assert settings.url is None
        assert settings.port == 5432
        assert settings.auto_create_schema is False

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TENANTGATE_DB_HOST", "db.internal")
        monkeypatch.setenv("TENANTGATE_DB_AUTO_CREATE_SCHEMA", "true")

        settings = DatabaseSettings(_env_file=None)

        assert settings.host == "db.internal"
        assert settings.auto_create_schema is True

    def test_connection_string_hides_password(self) -> None:
        settings = DatabaseSettings(
            _env_file=None,
            url=None,
            host="db",
            username="app",
            password="s3cret",
        )

        assert "s3cret" not in settings.connection_string
        assert settings.connection_string == "postgresql://app@db:5432/tenantgate"

    def test_async_url_encodes_credentials(self) -> None:
        settings = DatabaseSettings(
            _env_file=None,
            url=None,
            host="db",
            username="app",
            password="p@ss/word",
        )

        url = build_async_url(settings)

        assert url.startswith("postgresql+asyncpg://app:")
        assert "p%40ss%2Fword" in url

    def test_explicit_url_wins(self) -> None:
        settings = DatabaseSettings(_env_file=None, url="sqlite+aiosqlite://")

        assert build_async_url(settings) == "sqlite+aiosqlite://"


class TestAuthSettings:
    """Tests for token settings."""

    def test_defaults_to_hs256(self) -> None:
        settings = AuthSettings(_env_file=None, jwt_secret=SECRET)

        assert settings.jwt_algorithm == "HS256"

    def test_reads_secret_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TENANTGATE_AUTH_JWT_SECRET", SECRET)

        settings = AuthSettings(_env_file=None)

        assert settings.jwt_secret.get_secret_value() == SECRET

    def test_secret_is_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TENANTGATE_AUTH_JWT_SECRET", raising=False)

        with pytest.raises(ValidationError, match="jwt_secret"):
            AuthSettings(_env_file=None)

    def test_blank_secret_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AuthSettings(_env_file=None, jwt_secret="   ")

    def test_rejects_asymmetric_algorithm(self) -> None:
        with pytest.raises(ValidationError):
            AuthSettings(_env_file=None, jwt_secret=SECRET, jwt_algorithm="RS256")

    def test_rejects_tiny_ttl(self) -> None:
        with pytest.raises(ValidationError):
            AuthSettings(_env_file=None, jwt_secret=SECRET, access_token_ttl_seconds=5)


class TestTenancySettings:
    """Tests for tenancy settings."""

    def test_root_domain_is_normalized(self) -> None:
        settings = TenancySettings(_env_file=None, root_domain=" .Example.COM. ")

        assert settings.root_domain == "example.com"

    def test_root_domain_is_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TENANTGATE_TENANT_ROOT_DOMAIN", raising=False)

        with pytest.raises(ValidationError, match="root_domain"):
            TenancySettings(_env_file=None)

    def test_blank_root_domain_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TenancySettings(_env_file=None, root_domain="..")
