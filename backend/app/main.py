"""
StudyMate Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn app.main:app) or `python -m app`.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                   FastAPI App                        │
    │                                                      │
    │  Middleware: RequestID → Logging → GZip → CORS       │
    │                                                      │
    │  Routes:                                             │
    │   /partners  /topPartners  /myConnections            │
    │   /sendRequest/{id}  /requests  /  /health           │
    │                                                      │
    │  Exception Handlers:                                 │
    │   Validation→400  NotFound→404  Database→500         │
    │   StoreUnavailable→503  Exception→500                │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Create the MongoDB client and ping it (with retry)
    4. Attach client + database handle to app.state

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import close_client, connect_to_store, create_client
from app.exceptions import (
    DatabaseError,
    InvalidSchemaError,
    NotFoundError,
    StoreUnavailableError,
    StudyMateError,
    UpdateFailedError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, partners, requests

logger = logging.getLogger(__name__)


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
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # These log every heartbeat/connection at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Create the store connection on startup and close it on shutdown.

    A failed connection does not stop the server: the failure is logged,
    GET / keeps answering, and store-backed routes return 503 until
    MongoDB is reachable (the driver reconnects on its own).
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("StudyMate Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    client = None
    try:
        client = create_client()
    except Exception as e:
        # Malformed connection string (e.g. bad scheme) fails here, not on ping
        logger.error("Could not create MongoDB client: %s", str(e))

    if client is not None:
        await connect_to_store(client)
        app.state.mongo_client = client
        app.state.database = client[settings.mongo_db_name]

    logger.info("Server is running on port: %d", settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("StudyMate Backend shutting down...")
    close_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one error body format.

    Handler hierarchy:
        ValidationError (+ MissingParameter, InvalidIdentifier,
                         InvalidSchema, RequestValidationError) → 400
        NotFoundError                                           → 404
        UpdateFailedError                                       → 500 (fixed message)
        DatabaseError                                           → 500 (generic message)
        StoreUnavailableError                                   → 503
        StudyMateError (base)                                   → 500
        Exception (fallback)                                    → 500

    Server-side errors never expose driver details in the response body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input — tell them what's wrong."""
        rid = request_id_var.get("")
        logger.warning("[%s] %s: %s", rid, exc.error_code, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": jsonable_encoder(exc.context),
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body/query failed pydantic validation; reported as invalid_schema (400)."""
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        return await handle_validation_error(request, InvalidSchemaError(errors=errors))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested resource doesn't exist."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(UpdateFailedError)
    async def handle_update_failed(request: Request, exc: UpdateFailedError):
        rid = request_id_var.get("")
        logger.error("[%s] Update failed | Context: %s", rid, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "update_failed",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Database error — generic message to user, details logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        """MongoDB unreachable — the client should retry later."""
        rid = request_id_var.get("")
        logger.error("[%s] Store unavailable | Context: %s", rid, exc.context)
        return JSONResponse(
            status_code=503,
            content={
                "error": "store_unavailable",
                "message": exc.message,
                "request_id": rid,
            },
            headers={"Retry-After": "30"},
        )

    @app.exception_handler(StudyMateError)
    async def handle_app_error(request: Request, exc: StudyMateError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all for truly unexpected errors.

        Stack trace is logged server-side ONLY (never in response).
        """
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    Tests call this for a fresh app per test.
    """
    app = FastAPI(
        title="StudyMate API",
        description=(
            "Study partner matching: partner profiles, connection requests, "
            "and request counters backed by MongoDB."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS

    # Credentials cannot be combined with a wildcard origin
    allow_any_origin = settings.cors_origins_list == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=not allow_any_origin,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(partners.router)
    app.include_router(requests.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
