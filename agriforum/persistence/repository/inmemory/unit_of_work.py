"""In-memory unit of work for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

from agriforum.domain.repository import UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Serializes transactions on the store and rolls back on error.

    Only one transaction runs at a time, which gives the same outcome as
    row locks in PostgreSQL for the engagement write paths.
    """

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self.store.lock:
            snapshot = self.store.snapshot()
            try:
                yield
            except BaseException:
                self.store.restore(snapshot)
                raise
