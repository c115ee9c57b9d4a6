"""FastAPI application."""

from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discuss.config import AuthSettings, Settings
from discuss.domain.service import ActivityRecorder
from discuss.interface.api.routes import (
    admin,
    categories,
    comments,
    health,
    threads,
    votes,
)
from discuss.interface.error import register_error_handlers
from discuss.util.di.container import create_container, setup_di
from discuss.util.error import ConfigurationError
from discuss.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the stores on startup; flush audit writes and close on shutdown."""
    container: AsyncContainer = app.state.dishka_container

    # Resolving the recorder builds the content client and initializes beanie
    recorder = await container.get(ActivityRecorder)
    logfire.info("Application started")

    yield

    await recorder.drain()
    logfire.info("Activity recorder drained")
    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve from. Tests pass one wired to
            in-memory stores; by default the production container is built.

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = Settings()

    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == AuthSettings().jwt_secret
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")

    app_instance = FastAPI(
        title="Discuss API",
        description="Discussion forum core: threads, comments, votes and categories",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(threads.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(admin.router)

    return app_instance
