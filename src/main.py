"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.routes.health import router as health_router
from api.v1 import maintenance_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from infrastructure.database.session import Database

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database handle at startup and dispose of it at shutdown.

    A handle passed to ``create_app`` is owned by the caller and left open.
    """
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database(settings.async_database_url, echo=settings.debug)

    database: Database = app.state.database
    if settings.auto_create_schema:
        await database.create_schema()
    logger.info("application_started", environment=settings.app_env)

    yield

    if owns_database:
        await database.dispose()
        app.state.database = None
    logger.info("application_stopped")


def create_app(
    database: Optional[Database] = None,
    enable_maintenance_routes: Optional[bool] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## User Identity Service\n\n"
            "Account registration, credential checks and user profiles.\n\n"
            "### Features\n"
            "- **Registration**: every invalid field is reported in one response\n"
            "- **Login**: bcrypt-verified credentials, returns the profile\n"
            "- **Profiles**: computed age and days since joining\n\n"
            "### Authentication\n"
            "Login does not issue a session or bearer token; it only returns "
            "the profile payload."
        ),
        version="1.0.0",
        debug=settings.debug,
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "auth",
                "description": "Registration, login and profile operations",
            },
            {
                "name": "maintenance",
                "description": "Development-only bulk operations",
            },
        ],
    )
    app.state.database = database

    # Tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    if enable_maintenance_routes is None:
        enable_maintenance_routes = settings.maintenance_routes_active
    if enable_maintenance_routes and not settings.is_production:
        app.include_router(maintenance_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
