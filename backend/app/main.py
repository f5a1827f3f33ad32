"""CareBook Data Validator — schema-conformance service for stored collections.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.api.router import api_router
from app.log_config import configure_logging
from app.services.local_db import LocalDbClient, collection_fetchers
from app.validators import CollectionValidator

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    app.state.local_db = LocalDbClient(settings.LOCAL_DB_PATH)
    if not app.state.local_db.is_available():
        # App can still start — fetches will report "no documents found"
        logger.warning("local_db_missing", path=settings.LOCAL_DB_PATH)

    app.state.collection_validator = CollectionValidator(collection_fetchers(app.state.local_db))

    logger.info("app_started", local_db=settings.LOCAL_DB_PATH)

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="CareBook Data Validator",
    description=(
        "Validates the stored collections of the appointment-booking platform "
        "(users, patients, doctors, appointments, notifications) against their "
        "document schemas and reports field-level violations."
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "CareBook Data Validator",
        "version": "1.0.0",
        "description": "Schema-conformance checks for stored collections",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
