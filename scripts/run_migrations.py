#!/usr/bin/env python3
"""Apply the forum schema migrations.

Usage:
    python scripts/run_migrations.py             # upgrade to head
    python scripts/run_migrations.py <revision>  # upgrade to a revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from agriforum.config import Settings
from agriforum.util.logging import get_logger, setup_logging
from agriforum.util.observability import configure_logfire

logger = get_logger(__name__)


def main() -> int:
    """Upgrade the database schema, reporting failures to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    revision = sys.argv[1] if len(sys.argv) > 1 else "head"

    with logfire.span("run_migrations", revision=revision):
        try:
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Forum schema migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The API must not start against a half-migrated schema
            raise

    logger.info("Forum schema at revision %s", revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
