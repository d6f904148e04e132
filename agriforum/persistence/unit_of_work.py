"""PostgreSQL unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from agriforum.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Runs a block of repository calls in one database transaction.

    The repositories of a request share ``session``, so every statement
    they issue inside ``transaction()`` commits or rolls back together.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self.session.in_transaction():
            # Earlier reads in this request autobegan a transaction. Use a
            # savepoint so a failed attempt leaves the session usable for retry.
            async with self.session.begin_nested():
                yield
            await self.session.commit()
        else:
            async with self.session.begin():
                yield
        logfire.debug("Unit of work committed")
