"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from typing import Dict, Any

from skilllink.config import settings
from skilllink.infrastructure.db.database import init_db
from skilllink.infrastructure.web.middleware.error_handler import register_exception_handlers
from skilllink.infrastructure.web.routers import (
    auth,
    jobs,
    invites,
    projects,
    workers,
    employers,
    reviews,
    notifications,
    admin,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Setup and teardown operations.
    """
    # Startup
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")

    if settings.auto_create_tables:
        init_db()

    yield

    # Shutdown
    logger.info("Shutting down application")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Include routers
    for module, path, tag in (
        (auth, "auth", "Authentication"),
        (jobs, "jobs", "Jobs"),
        (invites, "invites", "Invites"),
        (projects, "projects", "Projects"),
        (workers, "workers", "Workers"),
        (employers, "employers", "Employers"),
        (reviews, "reviews", "Reviews"),
        (notifications, "notifications", "Notifications"),
        (admin, "admin", "Admin"),
    ):
        app.include_router(module.router, prefix=f"{settings.api_prefix}/{path}", tags=[tag])

    # Root endpoint
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "message": "Skill Link API",
            "version": settings.api_version,
            "environment": settings.environment,
            "health": f"{settings.api_prefix}/health"
        }

    # Health check endpoint
    @app.get(f"{settings.api_prefix}/health")
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint for monitoring."""
        return {
            "status": "ok",
            "environment": settings.environment,
            "version": settings.api_version
        }

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "skilllink.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
