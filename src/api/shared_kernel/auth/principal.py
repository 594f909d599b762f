"""The authenticated caller, as seen by every bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RolePermission:
    """One permission row held by the principal's role.

    ``action`` and ``subject`` are the raw stored strings; the ability
    factory decides which of them mean anything.
    """

    name: str
    action: str
    subject: str


@dataclass(frozen=True)
class Principal:
    """Authenticated user together with everything authorization needs.

    Built once per request by the principal resolver and attached to
    ``request.state.principal``.

    Attributes:
        user_id: The user's id
        username: The user's username
        email: The user's email address
        tenant_id: The tenant the user belongs to
        tenant_domain: That tenant's full domain
        role: Name of the user's role
        tenant_active: Whether the tenant is currently active
        permissions: Permissions granted through the role
    """

    user_id: int
    username: str
    email: str
    tenant_id: int | None
    tenant_domain: str | None
    role: str | None
    tenant_active: bool = True
    permissions: tuple[RolePermission, ...] = field(default_factory=tuple)
