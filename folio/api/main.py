"""
Folio API
=========

FastAPI application entry point.
Configures middleware, routes, and exception handlers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio.api.config import settings
from folio.api.middleware.auth import AuthenticationMiddleware
from folio.api.middleware.exceptions import register_exception_handlers
from folio.api.routes import audit, folders, health
from folio.core.admin_ops.infrastructure.observability.logging import configure_logging
from folio.core.admin_ops.infrastructure.observability.middleware import (
    RequestIDMiddleware,
    StructuredLoggingMiddleware,
)

configure_logging(log_level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Debug mode: {settings.debug}")

    from folio.shared.security import configure_security

    configure_security(
        settings.auth.secret_key,
        settings.auth.algorithm,
        expire_hours=settings.auth.expire_hours,
    )
    if settings.auth.secret_key == "default-insecure-key":
        logger.critical("SECURITY WARNING: Using default JWT secret. Set JWT_SECRET_KEY in production!")

    from folio.core.database.session import configure_database

    configure_database(
        database_url=settings.db.database_url,
        pool_size=settings.db.pool_size,
        max_overflow=settings.db.max_overflow,
        echo=settings.db.echo,
    )
    logger.info("Database module configured")

    yield

    logger.info("Shutting down...")

    from folio.core.database.session import close_database

    try:
        await close_database()
    except Exception as e:
        logger.warning(f"Error closing database: {e}")


# =============================================================================
# Create FastAPI Application
# =============================================================================

app = FastAPI(
    title="Folio API",
    description="""
    **Folio: document folders for schools and labs**

    Tenant-scoped folder hierarchy with soft delete, recursive sizes,
    cycle-safe moves, deep copies and an audit trail.

    ## Authentication

    All endpoints (except health checks) require a bearer token.
    Pass it in the `Authorization: Bearer <token>` header.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "health", "description": "Liveness probe"},
        {"name": "folders", "description": "Folder hierarchy management"},
        {"name": "audit", "description": "Audit trail browsing"},
    ],
    lifespan=lifespan,
)

# =============================================================================
# Register Middleware (order matters - last registered = outermost)
# =============================================================================

cors_origins = settings.cors_origins or ["*"]
allow_credentials = "*" not in cors_origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Authentication middleware (innermost)
app.add_middleware(AuthenticationMiddleware)

# Structured logging middleware (trace requests with latency/status)
app.add_middleware(StructuredLoggingMiddleware)

# Request ID middleware (outermost to ensure ID availability)
app.add_middleware(RequestIDMiddleware)

# =============================================================================
# Register Exception Handlers
# =============================================================================

register_exception_handlers(app)

# =============================================================================
# Register Routes
# =============================================================================

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(folders.router, prefix="/folders", tags=["folders"])
api_router.include_router(audit.router)

# Also expose health check at root /health for infrastructure probes
app.include_router(health.router)

app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - service metadata."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }
