"""Bounded retry and storage error translation for engagement writes."""

import asyncio
import random
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from typing import Optional, TypeVar

import logfire
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from agriforum.config import EngagementSettings
from agriforum.domain.error import (
    ConflictRetryableError,
    CounterDriftError,
    StorageUnavailableError,
)
from agriforum.domain.value import PostId

T = TypeVar("T")

# PostgreSQL SQLSTATE codes for integrity violations
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"

# Violations caused by a concurrent writer; re-reading state resolves them
CONCURRENT_WRITE_VIOLATIONS = frozenset({UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION})


def integrity_sqlstate(error: IntegrityError) -> Optional[str]:
    """SQLSTATE of the driver error wrapped by ``error``, if it carries one."""
    return getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)


@contextmanager
def translate_storage_errors(
    operation: str, post_id: Optional[PostId] = None
) -> Iterator[None]:
    """Convert driver-level failures into typed domain errors.

    Must wrap the unit of work block, so the rollback has already happened
    by the time the error is translated.

    Args:
        operation: Name of the operation, for logs and messages
        post_id: Post the operation writes to, for drift reports
    """
    try:
        yield
    except IntegrityError as e:
        sqlstate = integrity_sqlstate(e)
        if sqlstate in CONCURRENT_WRITE_VIOLATIONS:
            # Another writer inserted the (user, post) entry or deleted the post
            logfire.warn(
                "Integrity conflict during write",
                operation=operation,
                sqlstate=sqlstate,
                error=str(e),
            )
            raise ConflictRetryableError(
                f"Concurrent update conflict during {operation}"
            ) from e
        if sqlstate == CHECK_VIOLATION:
            logfire.error(
                "Counter drift detected, reconcile the post",
                operation=operation,
                post_id=str(post_id) if post_id else None,
                error=str(e),
            )
            raise CounterDriftError(str(post_id) if post_id else "unknown") from e
        logfire.error(
            "Unexpected integrity error",
            operation=operation,
            sqlstate=sqlstate,
            error=str(e),
        )
        raise
    except (OperationalError, InterfaceError, PoolTimeoutError) as e:
        logfire.error("Storage unavailable", operation=operation, error=str(e))
        raise StorageUnavailableError(
            f"Storage unavailable during {operation}, safe to retry"
        ) from e

class RetryPolicy:
    """Retries an operation a bounded number of times on write conflicts.

    Only ConflictRetryableError is retried; every other error propagates on
    the first occurrence.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff_base_seconds: float = 0.02,
        backoff_max_seconds: float = 0.25,
    ) -> None:
        self.max_attempts = max(1, int(max_attempts))
        self.backoff_base_seconds = max(0.0, float(backoff_base_seconds))
        self.backoff_max_seconds = max(
            self.backoff_base_seconds, float(backoff_max_seconds)
        )

    @classmethod
    def from_settings(cls, settings: EngagementSettings) -> "RetryPolicy":
        """Build a policy from engagement settings."""
        return cls(
            max_attempts=settings.max_attempts,
            backoff_base_seconds=settings.backoff_base_seconds,
            backoff_max_seconds=settings.backoff_max_seconds,
        )

    def backoff_delay(self, attempt: int) -> float:
        """Delay before the retry that follows ``attempt`` (1-based)."""
        if self.backoff_base_seconds <= 0:
            return 0.0
        delay = min(
            self.backoff_base_seconds * (2 ** (attempt - 1)),
            self.backoff_max_seconds,
        )
        jitter = random.uniform(0, delay * 0.1)
        return delay + jitter

    async def run(self, operation: Callable[[], Awaitable[T]], name: str) -> T:
        """Run ``operation`` until it succeeds or attempts are exhausted.

        Args:
            operation: Factory returning a fresh coroutine for each attempt
            name: Operation name for logs

        Returns:
            The operation's result

        Raises:
            ConflictRetryableError: If every attempt conflicted
        """
        last_error: Optional[ConflictRetryableError] = None
        for attempt in range(1, self.max_attempts + 1):
            if last_error is not None:
                delay = self.backoff_delay(attempt - 1)
                logfire.info(
                    "Retrying after write conflict",
                    operation=name,
                    attempt=attempt,
                    delay=delay,
                )
                if delay:
                    await asyncio.sleep(delay)
            try:
                return await operation()
            except ConflictRetryableError as e:
                last_error = e

        logfire.warn(
            "Conflict retries exhausted", operation=name, attempts=self.max_attempts
        )
        raise ConflictRetryableError(
            str(last_error), attempts=self.max_attempts
        ) from last_error
