"""
Tienda API: FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn tienda.main:app) or the `tienda-api` runner.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /, /health, /api/productos, /api/clientes,         │
    │  /api/ordenes, /api/categorias, /api/check-*        │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration; a missing DATABASE_URL is logged and aborts
       startup
    3. Create the Database (engine + pool) unless one was injected
    Shutdown:
    1. Dispose the engine if this app created it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tienda import __version__
from tienda.config import settings
from tienda.database import Database
from tienda.exceptions import DatabaseError, NotFoundError, TiendaError, ValidationError
from tienda.middleware.logging import RequestLoggingMiddleware
from tienda.middleware.request_id import RequestIDMiddleware, request_id_var
from tienda.routes import catalog, categories, clients, health, orders, products

logger = logging.getLogger(__name__)

GENERIC_STORE_ERROR = "A database error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # the platform captures stdout
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Acquire the connection pool on startup and release it on shutdown.

    An injected Database (tests) is used as-is and left for its owner to
    dispose.
    """
    setup_logging()
    logger.info("Tienda API %s starting up...", __version__)

    owns_database = False
    if getattr(app.state, "database", None) is None:
        try:
            settings.validate_required()
        except ValueError as e:
            logger.error("Configuration error: %s", str(e))
            logger.error("Set DATABASE_URL and restart the server.")
            raise
        app.state.database = Database.from_settings(settings)
        owns_database = True

    logger.info("API listening on %s:%d", settings.host, settings.port)

    yield

    logger.info("Tienda API shutting down...")
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    message: str,
    code: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "code": code,
            "details": details or None,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error envelope.

    Handler hierarchy:
        ValidationError         → 400 (missing/invalid field, bad table name,
                                       unknown referenced client)
        RequestValidationError  → 400 (body not a JSON object, bad query param)
        NotFoundError           → 404
        DatabaseError           → 500 (driver message unless disabled)
        TiendaError (base)      → 500
        Exception (fallback)    → 500
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, exc.message, "validation_error", exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        loc = tuple(first.get("loc", ()))
        source = loc[0] if loc else "body"
        location = ".".join(str(part) for part in loc[1:])
        details = {
            "field": location or "body",
            "constraint": first.get("type", "object"),
        }
        if source == "body":
            message = "Request body must be a JSON object"
        else:
            # query / path / header parameters
            message = f"Invalid {source} parameter '{location}'"
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), details)
        return _error_response(400, message, "validation_error", details)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, exc.message, "not_found", exc.context)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        message = exc.message if settings.expose_store_errors else GENERIC_STORE_ERROR
        return _error_response(500, message, "database_error")

    @app.exception_handler(TiendaError)
    async def handle_application_error(request: Request, exc: TiendaError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(500, exc.message, "server_error")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace is logged server-side only."""
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(500, "An unexpected error occurred.", "internal_server_error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Pre-built Database to use instead of one created from
                  settings at startup (tests inject an in-memory store).
    """
    app = FastAPI(
        title="Tienda API",
        description="CRUD API over the productos, clientes, ordenes and categorias tables.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(clients.router)
    app.include_router(orders.router)
    app.include_router(categories.router)
    app.include_router(catalog.router)

    return app


def run() -> None:
    """Entry point for the `tienda-api` console script."""
    import uvicorn

    uvicorn.run(
        "tienda.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `tienda.main:app` to be importable
app = create_app()
