"""Pydantic models for auth API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from iam.application.security import MAX_PASSWORD_BYTES
from iam.application.value_objects import AccessToken, Registration


class RegisterRequest(BaseModel):
    """Request model for self-service registration."""

    username: str = Field(..., description="Username", min_length=3, max_length=255)
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(
        ...,
        description="Password",
        min_length=8,
        max_length=MAX_PASSWORD_BYTES,
    )
    tenant: str = Field(
        ...,
        description="Tenant label, e.g. 'acme' for acme.<root domain>",
        min_length=1,
        max_length=63,
        pattern=r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$",
    )

    def to_registration(self) -> Registration:
        return Registration(
            username=self.username,
            email=str(self.email),
            password=self.password,
            tenant_label=self.tenant,
        )


class LoginRequest(BaseModel):
    """Request model for username/password login."""

    username: str = Field(..., description="Username", min_length=1)
    password: str = Field(..., description="Password", min_length=1)


class TokenResponse(BaseModel):
    """Response model carrying an access token."""

    access_token: str = Field(..., description="Signed bearer token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Lifetime in seconds")

    @classmethod
    def from_domain(cls, token: AccessToken) -> TokenResponse:
        """Convert an AccessToken value object to API response."""
        return cls(
            access_token=token.access_token,
            token_type=token.token_type,
            expires_in=token.expires_in,
        )
