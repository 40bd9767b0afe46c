"""Exceptions raised by the request context tracker."""


class TraceScopeError(Exception):
    """Base exception for all tracescope errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ScopeUnderflowError(TraceScopeError):
    """Raised when a request scope is exited with no active request (strict mode only)."""

    def __init__(self, context: object = None):
        super().__init__(
            f"exit_scope called with an empty request stack (context={context!r})",
            details={"context": repr(context)},
        )
        self.context = context
