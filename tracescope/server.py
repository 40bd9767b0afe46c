from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI

from tracescope.config import Settings, get_settings
from tracescope.middleware.request_context import RequestContextMiddleware
from tracescope.utils.logger import get_logger
from tracescope.utils.request_context import RequestContext, RequestContextScope, current_context

# Ensure root logger configured once
logger = get_logger(__name__)


def create_app(
    tracker: Optional[RequestContextScope] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or get_settings()
    tracker = tracker or RequestContextScope.from_settings(settings)

    app = FastAPI(title="tracescope", version="0.1.0")

    # Every request runs inside a tracked scope
    app.add_middleware(RequestContextMiddleware, tracker=tracker)

    # ----- health check ------------------------------------------------------
    @app.get("/health", tags=["system"])
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    # ----- trace introspection -----------------------------------------------
    @app.get("/trace", tags=["system"])
    def trace(ctx: RequestContext = Depends(current_context)) -> Dict[str, Any]:
        logger.info("Trace lookup at depth %d", ctx.depth)
        return {"trace_id": ctx.trace_id, "depth": ctx.depth}

    return app
