"""Stdlib logging for the command-line entry points.

The API itself reports through logfire; scripts such as the counter
reconciliation also print plain log lines so operators can read the
outcome in a terminal or a cron mail.
"""

import logging
import sys

from agriforum.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Chatty at INFO; only their warnings are useful in script output
QUIET_LOGGERS = ("sqlalchemy.engine", "asyncpg", "alembic.runtime.migration")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for a script run.

    DEBUG when ``settings.debug`` is set, INFO otherwise.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("agriforum").setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``agriforum`` hierarchy."""
    if not name.startswith("agriforum"):
        name = f"agriforum.{name}"
    return logging.getLogger(name)
