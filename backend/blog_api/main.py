"""
Blog Backend: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; uvicorn serves
       the module-level `app` (uvicorn blog_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request context → CORS                │
    │                                                     │
    │  Routes:  /posts   /comments   /health              │
    │                                                     │
    │  Exception Handlers:                                │
    │   InvalidRequest→400 │ DataStore→400 │ other→500    │
    │                                                     │
    │  State:  app.state.data_store (one client, shared)  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate Data Store settings, build the
              client (unless one was injected), log the listen address.
    Shutdown: close the client if this app built it.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog_api import __version__
from blog_api.config import settings
from blog_api.dependencies import create_data_store
from blog_api.exceptions import DataStoreError, InvalidRequestError
from blog_api.middleware.request_context import (
    RequestContextMiddleware,
    record_error_code,
    request_id_var,
)
from blog_api.routes import comments, health, posts
from blog_api.services.store_base import DataStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure process-wide logging to stdout.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Level:  settings.log_level
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # httpx logs every store call at INFO; the access line already covers it
    for name in ("httpx", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the Data Store client on startup; close it on shutdown.

    An injected client (create_app(data_store=...)) is used as-is and left
    open; whoever injected it owns it.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Blog Backend %s starting up...", __version__)

    try:
        settings.validate_data_store()
    except ValueError as e:
        # Keep serving: every request will fail on its own with a store error
        logger.error("Configuration error: %s", str(e))

    owns_store = app.state.data_store is None
    if owns_store:
        app.state.data_store = create_data_store(settings)
    logger.info("Data Store backend: %s", app.state.data_store.backend_name)
    logger.info("Server is running on http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Blog Backend shutting down...")
    if owns_store:
        await app.state.data_store.close()
        app.state.data_store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI's error list into one readable message."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        where = ".".join(loc)
        parts.append(f"{where}: {err.get('msg')}" if where else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def _error_response(request: Request, status_code: int, message: str, code: str) -> JSONResponse:
    record_error_code(request, code)
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code, "request_id": request_id_var.get("")},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        RequestValidationError → 400, code invalid_request
        InvalidRequestError    → 400, code invalid_request
        DataStoreError         → 400, code store_error (message forwarded)
        Exception (fallback)   → 500, generic message
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_errors(exc)
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), message)
        return _error_response(request, 400, message, "invalid_request")

    @app.exception_handler(InvalidRequestError)
    async def handle_invalid_request(request: Request, exc: InvalidRequestError):
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), exc.message)
        return _error_response(request, 400, exc.message, "invalid_request")

    @app.exception_handler(DataStoreError)
    async def handle_data_store_error(request: Request, exc: DataStoreError):
        logger.warning(
            "[%s] Data Store error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(request, 400, exc.message, "store_error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(request, 500, "An unexpected error occurred.", "internal_error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(data_store: Optional[DataStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        data_store: Client to use instead of building one from settings.
                    Tests pass a RestDataStore on a mock transport or a
                    SqlDataStore on SQLite.
    """
    app = FastAPI(
        title="Blog API",
        description="Posts and comments, stored in a hosted table store.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.data_store = data_store

    # Last added runs first: RequestContext → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)

    app.include_router(posts.router)
    app.include_router(comments.router)
    app.include_router(health.router)

    return app


app = create_app()
