"""Application-layer value objects for IAM bounded context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccessToken:
    """A signed bearer token handed to the client after login or registration."""

    access_token: str
    expires_in: int
    token_type: str = "bearer"


@dataclass(frozen=True)
class Registration:
    """Input for self-service registration.

    ``tenant_label`` is the bare label (e.g. ``acme``); the stored domain
    is qualified with the configured root domain.
    """

    username: str
    email: str
    password: str
    tenant_label: str


@dataclass(frozen=True)
class UserChanges:
    """Partial update of a user. None means leave unchanged."""

    username: str | None = None
    email: str | None = None
    password: str | None = None

    def changed_fields(self) -> list[str]:
        return [
            name
            for name in ("username", "email", "password")
            if getattr(self, name) is not None
        ]
