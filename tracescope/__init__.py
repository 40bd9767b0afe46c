"""
tracescope - per-request context tracking and trace-id correlation for Python web services.
"""

from .exceptions import ScopeUnderflowError, TraceScopeError
from .utils.request_context import (
    X_CLOUD_TRACE,
    RequestContext,
    RequestContextScope,
    RequestHandle,
    current_context,
    get_current_request,
    get_current_trace_id,
    parse_trace_id,
)

__version__ = "0.1.0"
__all__ = [
    "X_CLOUD_TRACE",
    "RequestContext",
    "RequestContextScope",
    "RequestHandle",
    "ScopeUnderflowError",
    "TraceScopeError",
    "current_context",
    "get_current_request",
    "get_current_trace_id",
    "parse_trace_id",
]
