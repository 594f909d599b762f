"""Map the shared error taxonomy to HTTP responses.

Services and dependencies raise domain errors; only this module decides
which status code the caller sees.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared_kernel.exceptions import (
    DuplicateConstraintError,
    ForbiddenError,
    MissingTenantContextError,
    UnauthenticatedError,
)
from shared_kernel.middleware.observability import (
    DefaultErrorBoundaryProbe,
    ErrorBoundaryProbe,
)


def register_exception_handlers(
    app: FastAPI,
    probe: ErrorBoundaryProbe | None = None,
) -> None:
    """Install handlers for the shared error taxonomy on ``app``.

    Args:
        app: The FastAPI application
        probe: Optional probe for rejected requests
    """
    probe = probe or DefaultErrorBoundaryProbe()

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(
        request: Request, exc: UnauthenticatedError
    ) -> JSONResponse:
        probe.request_rejected(
            status.HTTP_401_UNAUTHORIZED,
            type(exc).__name__,
            request.url.path,
            str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Not authenticated"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
        probe.request_rejected(
            status.HTTP_403_FORBIDDEN,
            type(exc).__name__,
            request.url.path,
            str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": str(exc) or "Forbidden"},
        )

    @app.exception_handler(DuplicateConstraintError)
    async def duplicate_handler(
        request: Request, exc: DuplicateConstraintError
    ) -> JSONResponse:
        probe.request_rejected(
            status.HTTP_409_CONFLICT,
            type(exc).__name__,
            request.url.path,
            str(exc),
        )
        content: dict[str, str] = {"detail": str(exc)}
        if exc.field is not None:
            content["field"] = exc.field
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=content)

    @app.exception_handler(MissingTenantContextError)
    async def missing_tenant_handler(
        request: Request, exc: MissingTenantContextError
    ) -> JSONResponse:
        probe.tenant_invariant_violated(request.url.path, str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
