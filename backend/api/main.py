"""FastAPI application entry point."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.errors import register_exception_handlers
from api.middleware import register_request_logging
from api.routers import health, status
from common.config import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Health check: http://localhost:{settings.port}/health")
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API around an explicit settings object."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()

    register_request_logging(app)
    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(status.router, tags=["Status"])

    return app


app = create_app()
