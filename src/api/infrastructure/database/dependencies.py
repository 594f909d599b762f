"""Database session management for FastAPI.

The engine and session factory are created once at startup by
``init_database`` and shared by every request. Each dependency below
yields a fresh session that is closed when the request ends.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine, create_session_factory
from infrastructure.database.hooks import PersistHookRegistry
from infrastructure.database.tenant_scope import TenantScopeFilter
from infrastructure.observability import DefaultPersistenceProbe
from infrastructure.settings import get_database_settings

_probe = DefaultPersistenceProbe()

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def init_database(
    hooks: PersistHookRegistry,
    scope_filter: TenantScopeFilter,
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create (or adopt) the engine and build the shared session factory.

    Safe to call more than once; the first call wins.

    Args:
        hooks: Persist hook registry attached to every session
        scope_filter: Tenant scope filter attached to every session
        engine: Engine to use instead of one built from settings

    Returns:
        The shared session factory
    """
    global _engine, _sessionmaker
    if _sessionmaker is None:
        with _engine_lock:
            if _sessionmaker is None:
                if engine is None:
                    settings = get_database_settings()
                    engine = create_engine(settings)
                    _probe.engine_created(settings.connection_string)
                _engine = engine
                _sessionmaker = create_session_factory(engine, hooks, scope_filter)
    return _sessionmaker


def get_engine() -> AsyncEngine:
    """Get the shared engine.

    Raises:
        RuntimeError: If ``init_database`` has not run
    """
    if _engine is None:
        raise RuntimeError("Database not initialized; call init_database() first")
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the shared session factory.

    Raises:
        RuntimeError: If ``init_database`` has not run
    """
    if _sessionmaker is None:
        raise RuntimeError("Database not initialized; call init_database() first")
    return _sessionmaker


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request session.

    Application services own the transaction boundary with
    ``session.begin()``; anything left uncommitted is rolled back when the
    session closes.

    Yields:
        AsyncSession for the request
    """
    async with get_sessionmaker()() as session:
        yield session


async def get_principal_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a dedicated, never-scoped session.

    Used to load the principal before the request session exists, so the
    lookup of the caller's own user row is never filtered.

    Yields:
        AsyncSession for principal resolution
    """
    async with get_sessionmaker()() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose of the engine and forget the session factory."""
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
    _engine = None
    _sessionmaker = None
