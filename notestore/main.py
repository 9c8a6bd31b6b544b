"""
NoteStore — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) builds the NoteStore for the configured directory,
       stores both on app.state, registers middleware, exception handlers and
       routes, and returns the app.
Who:   Called by notestore.cli, by tests, and by uvicorn in factory mode
       (uvicorn notestore.main:create_app --factory, configured from NOTESTORE_*).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐              │
    │  │   Req ID     │→│    Logging      │              │
    │  └──────────────┘ └─────────────────┘              │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌────────────┐ ┌─────────────┐ │
    │  │ /notes, /write │ │ /Upload... │ │ GET /health │ │
    │  └────────────────┘ └────────────┘ └─────────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the store directory (fatal on failure)
    3. Log startup complete

    Shutdown:
    1. Log shutdown complete (no resources to release)
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notestore import __version__
from notestore.config import Settings
from notestore.exceptions import (
    FileStorageError,
    NoteNotFoundError,
    NoteStoreError,
    ValidationError,
)
from notestore.middleware.logging import RequestLoggingMiddleware
from notestore.middleware.request_id import RequestIDMiddleware, request_id_var
from notestore.routes import health, notes, pages
from notestore.services.note_store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (captured by whatever supervises the process)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates notestore.access
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup prepares the store directory. A failure there is fatal: the error
    propagates, uvicorn aborts startup and the process exits non-zero.
    """
    settings: Settings = app.state.settings
    store: NoteStore = app.state.note_store

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("NoteStore starting up...")

    try:
        store.ensure_root()
    except FileStorageError as e:
        logger.error("Startup failed: %s | Context: %s", e.message, e.context)
        raise

    logger.info("Server ready at %s", settings.base_url)
    logger.info("API docs: %s/docs", settings.base_url)
    logger.info("=" * 60)

    yield

    logger.info("NoteStore shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(exc_code: str, message: str, details: Optional[dict] = None) -> dict:
    body = {
        "error": exc_code,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError (and subclasses) → 400 Bad Request
        NoteNotFoundError                → 404 Not Found
        FileStorageError                 → 500 Internal Server Error
        NoteStoreError (base)            → 500 Internal Server Error
        Exception (fallback)             → 500 Internal Server Error

    Only validation details reach the client. Storage contexts (paths, OS
    errors) and tracebacks are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body(exc.error_code, exc.message, exc.context),
        )

    @app.exception_handler(NoteNotFoundError)
    async def handle_not_found(request: Request, exc: NoteNotFoundError):
        logger.info("[%s] Note not found: %s | Context: %s", request_id_var.get(""), exc.name, exc.context)
        return JSONResponse(
            status_code=404,
            content=_error_body(exc.error_code, exc.message),
        )

    @app.exception_handler(NoteStoreError)
    async def handle_store_error(request: Request, exc: NoteStoreError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(exc.error_code, exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", "Server error"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration for this app. When omitted (uvicorn factory
                  mode) it is read from NOTESTORE_* environment variables.

    The store directory is not touched here; the lifespan creates it.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Notes API",
        description="Create, read, update, delete and list text notes stored as files.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.note_store = NoteStore(settings.cache_dir)
    app.state.started_at = time.time()

    # Last added executes first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(pages.router)
    app.include_router(health.router)

    return app
