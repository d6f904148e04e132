#!/usr/bin/env python3
"""Recompute forum post counters from the vote ledger and comment table.

Usage:
    python scripts/reconcile_counters.py            # every post
    python scripts/reconcile_counters.py <post_id>  # a single post
"""

import asyncio
import sys

import logfire

from agriforum.application.usecase.engagement import (
    ReconcileCountersRequest,
    ReconcileCountersUseCase,
)
from agriforum.config import Settings
from agriforum.domain.service import EngagementService
from agriforum.persistence.database import session_scope
from agriforum.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresVoteRepository,
)
from agriforum.persistence.unit_of_work import PostgresUnitOfWork
from agriforum.util.logging import get_logger, setup_logging
from agriforum.util.observability import configure_logfire

logger = get_logger(__name__)


async def reconcile(settings: Settings, post_id: str | None) -> int:
    """Run reconciliation and return the number of repaired posts."""
    async with session_scope(settings) as session:
        use_case = ReconcileCountersUseCase(
            engagement_service=EngagementService(
                post_repository=PostgresPostRepository(session),
                vote_repository=PostgresVoteRepository(session),
                comment_repository=PostgresCommentRepository(session),
                unit_of_work=PostgresUnitOfWork(session),
            )
        )
        response = await use_case.execute(ReconcileCountersRequest(post_id=post_id))

    for repaired in response.repaired:
        logger.info(
            "Repaired post %s: %s -> %s",
            repaired.post_id,
            repaired.before.model_dump(),
            repaired.after.model_dump(),
        )
    return len(response.repaired)


def main() -> int:
    """Reconcile counters and log any errors to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    post_id = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        repaired = asyncio.run(reconcile(settings, post_id))
        logger.info("Reconciliation complete, %d post(s) repaired", repaired)
        return 0

    except Exception as e:
        logfire.error(
            "Counter reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
