"""ASGI middleware that opens a request context for every request.

Implemented as a plain ASGI middleware rather than ``BaseHTTPMiddleware``
so the handler runs in the same task, and therefore the same context,
as the slot opened here.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from shared_kernel.tenancy.context import (
    RequestContextStore,
    get_request_context_store,
)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware:
    """Give each HTTP request a fresh tenant slot and a request id.

    The request id is taken from ``X-Request-ID`` when the caller sends
    one, bound to structlog contextvars, and echoed on the response.
    """

    def __init__(self, app: ASGIApp, store: RequestContextStore | None = None):
        self.app = app
        self._store = store or get_request_context_store()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        request_id = _read_request_id(scope) or uuid.uuid4().hex

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id
            await send(message)

        with self._store.request_scope():
            structlog.contextvars.clear_contextvars()
            structlog.contextvars.bind_contextvars(request_id=request_id)
            try:
                await self.app(scope, receive, send_with_request_id)
            finally:
                structlog.contextvars.clear_contextvars()


def _read_request_id(scope: Scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name == b"x-request-id":
            decoded = value.decode("latin-1").strip()
            return decoded or None
    return None
