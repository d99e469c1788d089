from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.types import ASGIApp

from .config import Settings, settings
from .dispatch import file_handler
from .errors import UnsupportedTypeError
from .handlers import map_handler
from .middleware import TraceLogMiddleware

logger = logging.getLogger("urlshort")

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def default_app() -> FastAPI:
    """Innermost fallback: a health probe and a greeting for every other path."""
    app = FastAPI(title="urlshort", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "urlshort"}

    # Catch-all: unmapped paths get the greeting rather than a 404
    @app.api_route("/{full_path:path}", methods=ALL_METHODS)
    def hello(full_path: str):
        return PlainTextResponse("Hello, world!\n")

    return app


def create_app(cfg: Settings | None = None, fallback: ASGIApp | None = None) -> ASGIApp:
    """Compose file source -> default table -> ``fallback`` and add request logging.

    ParseError / OpenError / ReadError propagate. An unsupported source type
    is logged and the app keeps serving without the file source.
    """
    cfg = cfg or settings
    inner = map_handler(cfg.DEFAULT_REDIRECTS, fallback or default_app())

    try:
        handler = file_handler(cfg.FILE_NAME, cfg.FILE_TYPE, inner, db_timeout=cfg.DB_QUERY_TIMEOUT_SEC)
    except UnsupportedTypeError as e:
        logger.error({"event": "source.unsupported", "type": e.source_type, "error": str(e)})
        handler = e.handler

    return TraceLogMiddleware(handler)
