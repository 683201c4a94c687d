"""FastAPI application."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from radar.config import Settings
from radar.interface.api.errors import register_error_handlers
from radar.interface.api.routes import health, moderation, polls, votes
from radar.util.di.container import create_container, setup_di
from radar.util.observability import instrument_fastapi


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it with sending disabled.

    Args:
        container: DI container to use (defaults to the production container)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Talent Radar Engagement API",
        description="Polls, reply and comment voting, and moderation for Talent Radar",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    # Poll routes first: /polls/{id}/vote must not fall through to the
    # generic /{collection}/{id}/vote content route
    app_instance.include_router(health.router)
    app_instance.include_router(polls.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(moderation.router)

    return app_instance
