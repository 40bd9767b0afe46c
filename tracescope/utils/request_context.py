"""Context-local tracking of the request currently being processed.

Host dispatch code calls `RequestContextScope.enter_scope` / `exit_scope`
around every unit of work. The tracker keeps a stack of active requests and,
for the outermost request only, derives a trace id from the
`X-Cloud-Trace-Context` header so log records anywhere in the call path can
pick it up via `get_current_trace_id()`.

State lives in `contextvars`, so each thread (and each asyncio Task) sees only
its own stack and trace id.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator, Optional, Protocol, Tuple

from tracescope.exceptions import ScopeUnderflowError

if TYPE_CHECKING:
    from tracescope.config import Settings

logger = logging.getLogger(__name__)

X_CLOUD_TRACE = "x-cloud-trace-context"


class RequestHandle(Protocol):
    """Anything the host hands the tracker as "the request"."""

    def get_header(self, name: str) -> Optional[str]: ...

    def get_attribute(self, key: str) -> Any: ...

    def set_attribute(self, key: str, value: Any) -> None: ...


# Active requests, most recent last. Always replaced, never mutated in place.
_request_stack: contextvars.ContextVar[Tuple[RequestHandle, ...]] = contextvars.ContextVar(
    "tracescope_request_stack", default=()
)

# Trace id of the outermost request entered in this context
current_trace_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "current_trace_id", default=None
)


def parse_trace_id(header_value: str) -> str:
    """Return the TRACE_ID part of a `TRACE_ID/SPAN_ID;o=OPTIONS` header value."""
    return header_value.partition("/")[0]


@dataclass(frozen=True)
class RequestContext:
    """Snapshot of the calling context, suitable for dependency injection."""

    request: Optional[RequestHandle]
    trace_id: Optional[str]
    depth: int

    @property
    def in_scope(self) -> bool:
        return self.depth > 0


class RequestContextScope:
    """Scope listener maintaining the current request and trace id.

    Args:
        header_name: Inbound header carrying the trace context.
        attribute_key: Request attribute used to read/cache the derived trace id.
        strict: Raise `ScopeUnderflowError` on an unbalanced exit instead of
            logging a warning and ignoring it.

    Example:
        tracker = RequestContextScope()
        with tracker.scope(app, request, "REQUEST"):
            handle(request)
    """

    def __init__(
        self,
        header_name: str = X_CLOUD_TRACE,
        attribute_key: Optional[str] = None,
        strict: bool = False,
    ) -> None:
        self.header_name = header_name
        self.attribute_key = attribute_key or header_name
        self.strict = strict

    @classmethod
    def from_settings(cls, settings: Optional["Settings"] = None) -> "RequestContextScope":
        if settings is None:
            from tracescope.config import get_settings

            settings = get_settings()
        return cls(
            header_name=settings.trace_header,
            attribute_key=settings.trace_attribute,
            strict=settings.strict_scopes,
        )

    def enter_scope(self, context: Any, request: Optional[RequestHandle], reason: Any = None) -> None:
        if request is not None:
            stack = _request_stack.get()
            if not stack:
                current_trace_id.set(self._derive_trace_id(request))
            _request_stack.set(stack + (request,))
        logger.debug("enterScope %s (reason=%s)", context, reason)

    def exit_scope(self, context: Any, request: Optional[RequestHandle]) -> None:
        logger.debug("exitScope %s", context)
        if request is None:
            return
        stack = _request_stack.get()
        if not stack:
            if self.strict:
                raise ScopeUnderflowError(context)
            logger.warning("exitScope %s with no active request; ignoring", context)
            return
        _request_stack.set(stack[:-1])

    @contextmanager
    def scope(self, context: Any, request: Optional[RequestHandle], reason: Any = None) -> Iterator[RequestContext]:
        """Enter a scope and guarantee the matching exit, even on error."""
        self.enter_scope(context, request, reason)
        try:
            yield current_context()
        finally:
            self.exit_scope(context, request)

    def _derive_trace_id(self, request: RequestHandle) -> Optional[str]:
        trace_id = request.get_attribute(self.attribute_key)
        if trace_id is None:
            trace_id = request.get_header(self.header_name)
            if trace_id is not None:
                trace_id = parse_trace_id(trace_id)
                request.set_attribute(self.attribute_key, trace_id)
        return trace_id

    @staticmethod
    def get_current_request() -> Optional[RequestHandle]:
        return get_current_request()

    @staticmethod
    def get_current_trace_id() -> Optional[str]:
        return get_current_trace_id()


def get_current_request() -> Optional[RequestHandle]:
    """Return the innermost active request, or None outside any request scope."""
    stack = _request_stack.get()
    return stack[-1] if stack else None


def get_current_trace_id() -> Optional[str]:
    return current_trace_id.get()


def get_scope_depth() -> int:
    return len(_request_stack.get())


def current_context() -> RequestContext:
    return RequestContext(
        request=get_current_request(),
        trace_id=get_current_trace_id(),
        depth=get_scope_depth(),
    )


# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def reset_request_context() -> None:
    """Return the calling context to the idle state (empty stack, no trace id)."""

    _request_stack.set(())
    current_trace_id.set(None)
