"""Logfire setup for the forum API.

Requests and SQL statements are traced by the instrumentation below. The
vote and comment services open their own spans (``vote_service.cast_vote``,
``comment_service.add_comment``), so the ledger write and the counter
increment of one request appear nested under a single span.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from agriforum.config import Settings

SERVICE_NAME = "agriforum-api"

# Load balancer probes would otherwise dominate the request traces
UNTRACED_URLS = "/health"


def should_send_to_logfire(settings: Settings) -> bool:
    """Decide whether telemetry leaves the process.

    An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise telemetry is
    sent only when a token is configured.
    """
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is built.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send_to_logfire(settings)

    config_kwargs: dict[str, Any] = {
        "service_name": SERVICE_NAME,
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health probes."""
    logfire.instrument_fastapi(app, excluded_urls=UNTRACED_URLS)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued through ``engine``.

    The SQL commenter tags each statement with its span, which makes the
    compare-and-set ledger writes easy to find in ``pg_stat_activity``.
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
