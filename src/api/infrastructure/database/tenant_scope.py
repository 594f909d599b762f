"""Per-session tenant scoping for tenant-owned models.

Once a tenant is installed on a session, every ORM SELECT, UPDATE and
DELETE issued through it that touches a tenant-owned model carries an
extra ``tenant_id = :tenant`` criterion, including joined and
relationship loads. Sessions with nothing installed are unfiltered.
"""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import ORMExecuteState, Session, sessionmaker, with_loader_criteria

from infrastructure.observability import DefaultPersistenceProbe, PersistenceProbe
from shared_kernel.exceptions import (
    MissingTenantContextError,
    PrincipalMissingError,
)
from shared_kernel.tenancy.context import RequestContextStore

SCOPE_INFO_KEY = "tenant_scope"


def _sync_session(session: Session | AsyncSession) -> Session:
    if isinstance(session, AsyncSession):
        return session.sync_session
    return session


class TenantScopeFilter:
    """Adds tenant criteria to statements against the configured models.

    Args:
        models: Tenant-owned mapped classes; each must have ``tenant_id``
        probe: Optional persistence probe
    """

    def __init__(
        self,
        models: Sequence[type],
        probe: PersistenceProbe | None = None,
    ) -> None:
        self._models = tuple(models)
        self._probe = probe or DefaultPersistenceProbe()

    @property
    def models(self) -> tuple[type, ...]:
        return self._models

    def attach(self, target: sessionmaker | type[Session] | Session) -> None:
        """Listen for ORM executions on a sessionmaker, Session class or session."""
        event.listen(target, "do_orm_execute", self._apply_criteria)

    def install(self, session: Session | AsyncSession, tenant_id: int) -> None:
        """Restrict ``session`` to ``tenant_id`` for the rest of its life.

        Raises:
            MissingTenantContextError: If a different tenant is already installed
        """
        sync_session = _sync_session(session)
        installed = sync_session.info.get(SCOPE_INFO_KEY)
        if installed is not None:
            if installed == tenant_id:
                return
            self._probe.tenant_scope_reinstall_rejected(installed, tenant_id)
            raise MissingTenantContextError(
                f"Session is already scoped to tenant {installed}"
            )
        sync_session.info[SCOPE_INFO_KEY] = tenant_id
        self._probe.tenant_scope_installed(tenant_id)

    def installed_tenant(self, session: Session | AsyncSession) -> int | None:
        """Return the tenant installed on ``session``, if any."""
        return _sync_session(session).info.get(SCOPE_INFO_KEY)

    def install_for_request(
        self,
        session: Session | AsyncSession,
        principal: Any,
        store: RequestContextStore,
    ) -> int:
        """Scope ``session`` to the tenant of the authenticated request.

        Args:
            session: The request's session
            principal: The resolved principal, or None if resolution never ran
            store: Request context store holding the bound tenant

        Returns:
            The installed tenant id

        Raises:
            PrincipalMissingError: If no principal is attached to the request
            MissingTenantContextError: If the principal has no tenant, none is
                bound, or the bound tenant differs from the principal's
        """
        if principal is None:
            raise PrincipalMissingError("Tenant scoping requires an authenticated principal")
        if principal.tenant_id is None:
            raise MissingTenantContextError(
                f"Principal {principal.user_id} has no tenant"
            )

        tenant = store.require_tenant()
        if tenant.tenant_id != principal.tenant_id:
            raise MissingTenantContextError(
                "Bound tenant does not match the principal's tenant"
            )

        self.install(session, tenant.tenant_id)
        return tenant.tenant_id

    def _apply_criteria(self, execute_state: ORMExecuteState) -> None:
        tenant_id = execute_state.session.info.get(SCOPE_INFO_KEY)
        if tenant_id is None:
            return
        if not (
            execute_state.is_select
            or execute_state.is_update
            or execute_state.is_delete
        ):
            return
        # Criteria added to the top-level statement propagate to these loads.
        if execute_state.is_column_load or execute_state.is_relationship_load:
            return

        execute_state.statement = execute_state.statement.options(
            *(
                with_loader_criteria(
                    model,
                    model.tenant_id == tenant_id,
                    include_aliases=True,
                )
                for model in self._models
            )
        )
