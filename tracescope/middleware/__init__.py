from .request_context import RequestContextMiddleware, StarletteRequestHandle

__all__ = ["RequestContextMiddleware", "StarletteRequestHandle"]
