"""Unit of work interface.

Ledger, comment and counter writes that belong together run inside one
``transaction()``; if any step raises, every write made inside the block is
discarded.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction that commits on exit and rolls back on error.

        Usage:
            async with unit_of_work.transaction():
                await vote_repository.create(vote)
                await post_repository.apply_vote_delta(post_id, 1, 0)
        """
        pass
