#!/usr/bin/env python3
"""Start the engagement API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from radar.config import Settings
from radar.util.logging import setup_logging
from radar.util.observability import configure_logfire


def main() -> int:
    """Start the API and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting engagement API",
            host=settings.host,
            port=settings.port,
            environment=settings.environment,
        )

        # The app is built by its factory inside the server process
        uvicorn.run(
            "radar.interface.api.app:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
