"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single SQLite connection (shared across all
requests via ``request.app.state.db``) and initialises the schema.  On
shutdown it closes the connection cleanly.

Routers
-------
    /api/v1           — health check and link processing
    /api/collections  — read back stored records
    /                 — HTML pages and the login stub

Static files from ``settings.public_dir`` are served at ``/`` when that
directory exists; routes registered above take precedence.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from backend.config import settings
from backend.db import get_connection, init_db
from backend.errors import ClipperError, MalformedRequest
from backend.log import configure_logging

from backend.api.routers import links as links_router
from backend.api.routers import pages as pages_router
from backend.api.routers import records as records_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the DB on startup and close it on shutdown."""
    conn = get_connection()
    init_db(conn)
    app.state.db = conn
    try:
        yield
    finally:
        conn.close()


async def clipper_error_handler(request: Request, exc: ClipperError) -> JSONResponse:
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Only the link endpoint reports a malformed body; other routes keep the default 422.
    if not request.url.path.endswith("/processLink"):
        return await request_validation_exception_handler(request, exc)
    error = MalformedRequest(cause=exc)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Logging is configured from ``settings.log_level`` only when nothing (for
    example the CLI) has configured the root logger yet.
    """
    if not logging.getLogger().handlers:
        configure_logging()

    app = FastAPI(
        title="Clipper API",
        description=(
            "Clips web articles: fetches a page, extracts its title and body "
            "text, and stores them as a record."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.templates = Jinja2Templates(directory=str(settings.views_dir))

    app.add_exception_handler(ClipperError, clipper_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(links_router.router, prefix="/api/v1", tags=["links"])
    app.include_router(records_router.router, prefix="/api/collections", tags=["records"])
    app.include_router(pages_router.router, tags=["pages"])

    if settings.public_dir.is_dir():
        app.mount(
            "/",
            StaticFiles(directory=str(settings.public_dir)),
            name="public",
        )

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --reload
app = create_app()
