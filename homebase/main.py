"""
Homebase Backend: FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, routers and the
       Database component; uvicorn serves the module-level `app`
       (uvicorn homebase.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌─────────────┐ ┌────────────┐  │
    │  │ /api/properties│ │ /api/movies │ │ /health    │  │
    │  └────────────────┘ └─────────────┘ └────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ClientError→its status │ bad body→400 │ else→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → optional table creation
    Shutdown: dispose the Database (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from homebase import __version__
from homebase.config import settings
from homebase.database import Database
from homebase.exceptions import (
    AuthenticationError,
    ClientError,
    HomebaseError,
)
from homebase.middleware.logging import RequestLoggingMiddleware
from homebase.middleware.request_id import RequestIDMiddleware, request_id_var
from homebase.routes import health, movies, properties

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] homebase.access: GET /api/movies 200 ...
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access logger replaces uvicorn's; SQL echo only when asked for
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Homebase Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: health checks and local development still work
        logger.error("Configuration error: %s", str(e))

    database: Database = app.state.database
    if settings.db_create_tables:
        await database.create_tables()

    if not settings.google_maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; new properties will have no image")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Homebase Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _describe_validation_errors(exc: RequestValidationError) -> list:
    # exc.errors() can carry exception objects in "ctx"; keep only JSON-safe parts
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


def _server_error(rid: str, error: str = "server_error") -> JSONResponse:
    # Internal details never leave the process; the request id ties the reply to the logs
    return JSONResponse(
        status_code=500,
        content={
            "error": error,
            "message": "An internal error occurred. Please try again later.",
            "request_id": rid,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the centralized error responder.

    Handler hierarchy (Starlette picks the most specific class):
        ClientError             → carried status (400/401/403/404)
        RequestValidationError  → 400 (malformed JSON or wrong field types)
        HomebaseError           → 500, covers DatabaseError
        Exception (fallback)    → 500, stack trace logged

    Response bodies never include stack traces or SQL.
    """

    @app.exception_handler(ClientError)
    async def handle_client_error(request: Request, exc: ClientError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] %s %s → %d %s",
            rid, request.method, request.url.path, exc.status_code, exc.message,
        )
        headers = {}
        if isinstance(exc, AuthenticationError):
            headers["WWW-Authenticate"] = "Bearer"
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.context or None,
                "request_id": rid,
            },
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = _describe_validation_errors(exc)
        message = "Invalid request"
        if errors:
            # loc starts with "body"/"path"/"query"; the rest names the field
            loc = errors[0]["loc"]
            field = ".".join(loc[1:]) or (loc[0] if loc else "request")
            message = f"{field}: {errors[0]['msg']}"
        logger.warning("[%s] %s %s → 400 %s", rid, request.method, request.url.path, message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": message,
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(HomebaseError)
    async def handle_internal_error(request: Request, exc: HomebaseError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s in %s %s: %s | Context: %s",
            rid, type(exc).__name__, request.method, request.url.path, exc.message, exc.context,
        )
        return _server_error(rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unhandled %s in %s %s",
            rid, type(exc).__name__, request.method, request.url.path,
            exc_info=exc,
        )
        return _server_error(rid, error="internal_server_error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Data-access component to serve from. Built from settings
                  when omitted; tests pass one bound to a temporary SQLite file.
    """
    app = FastAPI(
        title="Homebase API",
        description="Track your properties and your movie list.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database or Database.from_settings(settings)

    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(properties.router)
    app.include_router(movies.router)
    app.include_router(health.router)

    return app


app = create_app()
