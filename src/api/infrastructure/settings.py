"""Application settings using pydantic-settings.

Settings are loaded from environment variables. Database settings have
defaults for development; the token secret and the tenant root domain
have none and must always be set.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        TENANTGATE_DB_URL: Full SQLAlchemy URL, overrides the discrete fields
        TENANTGATE_DB_HOST: Database host (default: localhost)
        TENANTGATE_DB_PORT: Database port (default: 5432)
        TENANTGATE_DB_DATABASE: Database name (default: tenantgate)
        TENANTGATE_DB_USERNAME: Database user (default: tenantgate)
        TENANTGATE_DB_PASSWORD: Database password (required in production)
        TENANTGATE_DB_POOL_SIZE: Connections kept in the pool (default: 10)
        TENANTGATE_DB_AUTO_CREATE_SCHEMA: Create tables on startup (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy async URL (e.g. sqlite+aiosqlite://)",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="tenantgate", description="Database name")
    username: str = Field(default="tenantgate", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    auto_create_schema: bool = Field(
        default=False,
        description="Create all tables on startup (development only)",
    )

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.url is not None:
            return self.url.split("@")[-1]
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Bearer token settings.

    Environment variables:
        TENANTGATE_AUTH_JWT_SECRET: HMAC secret used to sign access tokens (required)
        TENANTGATE_AUTH_JWT_ALGORITHM: Signing algorithm (default: HS256)
        TENANTGATE_AUTH_ACCESS_TOKEN_TTL_SECONDS: Token lifetime (default: 3600)
        TENANTGATE_AUTH_ISSUER: Issuer claim written to and expected on tokens
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        ...,
        description="HMAC secret for signing access tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_ttl_seconds: int = Field(
        default=3600,
        description="Access token lifetime in seconds",
        ge=60,
    )
    issuer: str = Field(default="tenantgate", description="Token issuer")

    @field_validator("jwt_secret")
    @classmethod
    def validate_secret(cls, value: SecretStr) -> SecretStr:
        """Reject blank secrets."""
        if not value.get_secret_value().strip():
            raise ValueError("jwt_secret must not be empty")
        return value

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_algorithm(cls, value: str) -> str:
        """Only symmetric HMAC algorithms are supported."""
        if value not in ("HS256", "HS384", "HS512"):
            raise ValueError(f"Unsupported JWT algorithm: {value}")
        return value


class TenancySettings(BaseSettings):
    """Multi-tenancy settings.

    Environment variables:
        TENANTGATE_TENANT_ROOT_DOMAIN: Root domain appended to tenant labels (required)
        TENANTGATE_TENANT_DEFAULT_ROLE: Role given to self-registered users
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANTGATE_TENANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root_domain: str = Field(
        ...,
        description="Root domain appended to every tenant label",
        min_length=1,
    )
    default_role: str = Field(
        default="user",
        description="Role assigned at registration",
    )

    @field_validator("root_domain")
    @classmethod
    def strip_root_domain(cls, value: str) -> str:
        """Normalize surrounding dots and whitespace."""
        stripped = value.strip().strip(".")
        if not stripped:
            raise ValueError("root_domain must not be empty")
        return stripped.lower()


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenantgate API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def auth(self) -> AuthSettings:
        """Get auth settings."""
        return get_auth_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()
