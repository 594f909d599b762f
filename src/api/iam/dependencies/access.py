"""Per-route access classes and policy enforcement.

Every route states how it is reached by choosing one session dependency:

- ``RouteAccess.PUBLIC``: no credential, unfiltered session.
- ``RouteAccess.TENANT_SCOPED``: authenticated; the session only sees the
  principal's tenant.
- ``RouteAccess.SKIP_TENANT_SCOPE``: authenticated; unfiltered session for
  administrative reads across tenants.

Policies are declared alongside with ``require_policies``.
"""

from enum import StrEnum
from functools import lru_cache
from typing import Annotated, Any, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from iam.dependencies.authentication import get_current_principal
from infrastructure.database.dependencies import get_write_session
from infrastructure.database.tenant_scope import TenantScopeFilter
from shared_kernel.auth import Principal
from shared_kernel.authorization import AbilityFactory, Policy, PolicyEvaluator
from shared_kernel.tenancy import RequestContextStore, get_request_context_store
from wiring import get_tenant_scope_filter


class RouteAccess(StrEnum):
    """How a route is authenticated and scoped."""

    PUBLIC = "public"
    TENANT_SCOPED = "tenant_scoped"
    SKIP_TENANT_SCOPE = "skip_tenant_scope"


async def get_public_session(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> AsyncSession:
    """Session for public routes. No credential is read."""
    return session


async def get_scoped_session(
    request: Request,
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    scope_filter: Annotated[TenantScopeFilter, Depends(get_tenant_scope_filter)],
    store: Annotated[RequestContextStore, Depends(get_request_context_store)],
) -> AsyncSession:
    """Session restricted to the authenticated principal's tenant.

    Raises:
        UnauthenticatedError: If the request cannot be authenticated
        MissingTenantContextError: If the tenant was never bound
    """
    scope_filter.install_for_request(
        session,
        getattr(request.state, "principal", None),
        store,
    )
    return session


async def get_unscoped_session(
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> AsyncSession:
    """Session for authenticated routes that opt out of tenant scoping."""
    return session


_SESSION_DEPENDENCIES: dict[RouteAccess, Callable[..., Any]] = {
    RouteAccess.PUBLIC: get_public_session,
    RouteAccess.TENANT_SCOPED: get_scoped_session,
    RouteAccess.SKIP_TENANT_SCOPE: get_unscoped_session,
}


def session_for(access: RouteAccess) -> Callable[..., Any]:
    """Return the session dependency implementing ``access``."""
    return _SESSION_DEPENDENCIES[access]


@lru_cache
def get_ability_factory() -> AbilityFactory:
    return AbilityFactory()


@lru_cache
def get_policy_evaluator() -> PolicyEvaluator:
    return PolicyEvaluator()


def require_policies(*policies: Policy) -> Callable[..., Any]:
    """Build a dependency enforcing ``policies`` for the current principal.

    The dependency returns the principal so routes can use it directly.
    With no policies every authenticated caller passes.

    Raises:
        ForbiddenError: From the dependency, if any policy denies
    """

    async def _enforce(
        request: Request,
        principal: Annotated[Principal, Depends(get_current_principal)],
        factory: Annotated[AbilityFactory, Depends(get_ability_factory)],
        evaluator: Annotated[PolicyEvaluator, Depends(get_policy_evaluator)],
    ) -> Principal:
        ability = factory.create_for(principal)
        evaluator.enforce(policies, ability, principal, request)
        return principal

    return _enforce
