"""FastAPI middleware that runs every HTTP request inside a tracked request scope.

The middleware wraps the Starlette request in a `StarletteRequestHandle` and
enters a `RequestContextScope` scope around `call_next`, so the trace id from
`X-Cloud-Trace-Context` is available to log records and to handlers (async or
threadpool-run sync ones) through `get_current_trace_id()`. The scope is
always exited, even if the downstream app raises.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from tracescope.utils.request_context import RequestContextScope


class StarletteRequestHandle:
    """Adapts a Starlette `Request` to the tracker's request-handle protocol.

    Attributes are stored in the ASGI ``scope["state"]`` dict, which every
    Request built over the same scope shares (it also backs ``request.state``).
    """

    def __init__(self, request: Request) -> None:
        self.request = request

    def get_header(self, name: str) -> Optional[str]:
        return self.request.headers.get(name)

    def get_attribute(self, key: str) -> Any:
        return self._state.get(key)

    def set_attribute(self, key: str, value: Any) -> None:
        self._state[key] = value

    @property
    def _state(self) -> dict:
        return self.request.scope.setdefault("state", {})

    def __repr__(self) -> str:
        return f"StarletteRequestHandle({self.request.method} {self.request.url.path})"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that tracks the in-flight request and its trace id."""

    reason = "REQUEST"

    def __init__(self, app: ASGIApp, tracker: Optional[RequestContextScope] = None) -> None:
        super().__init__(app)
        self.tracker = tracker or RequestContextScope()

    async def dispatch(self, request, call_next: Callable[[object], Awaitable[Response]]):  # type: ignore[override]
        handle = StarletteRequestHandle(request)
        with self.tracker.scope(self.app, handle, self.reason):
            return await call_next(request)
