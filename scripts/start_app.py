#!/usr/bin/env python3
"""Serve the forum API with uvicorn."""

import sys

import logfire
import uvicorn

from agriforum.config import Settings
from agriforum.util.observability import configure_logfire


def main() -> int:
    """Run the API, reporting startup failures to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    logfire.info(
        "Starting forum API",
        environment=settings.environment,
        port=settings.port,
        git_sha=settings.git_sha,
    )

    try:
        # create_app is a factory so each worker builds its own container
        uvicorn.run(
            "agriforum.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            reload=settings.environment == "development",
            proxy_headers=True,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "Forum API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
