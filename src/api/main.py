"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from iam.application.services import ReferenceDataService
from iam.infrastructure.role_repository import RoleRepository
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_sessionmaker,
)
from infrastructure.database.models import Base
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultPersistenceProbe, DefaultStartupProbe
from infrastructure.settings import (
    get_auth_settings,
    get_database_settings,
    get_settings,
    get_tenancy_settings,
)
from infrastructure.version import __version__
from organizations.presentation import router as organizations_router
from shared_kernel.middleware import RequestContextMiddleware, register_exception_handlers
from wiring import init_persistence

_probe = DefaultStartupProbe()
_persistence_probe = DefaultPersistenceProbe()


async def prepare_database() -> None:
    """Create tables when configured to, then seed roles and permissions."""
    if get_database_settings().auto_create_schema:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        _persistence_probe.schema_created(sorted(Base.metadata.tables))

    async with get_sessionmaker()() as session:
        service = ReferenceDataService(
            session=session,
            role_repository=RoleRepository(session),
            probe=_probe,
        )
        await service.ensure_reference_data()


@asynccontextmanager
async def tenantgate_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Session factory creation with persist hooks and tenant scoping attached
    - Reference data seeding
    - Engine disposal on shutdown
    """
    # Settings without defaults fail here rather than on the first request.
    get_auth_settings()
    get_tenancy_settings()
    init_persistence()
    await prepare_database()
    _probe.application_started(__version__)

    yield

    await close_database_connections()
    _probe.application_stopped()


def create_app() -> FastAPI:
    """Build the FastAPI application.

    Returns:
        The configured application
    """
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else "INFO")

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant API with tenant isolation and capability-based authorization",
        version=__version__,
        lifespan=tenantgate_lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(iam_router)
    app.include_router(organizations_router)

    @app.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
