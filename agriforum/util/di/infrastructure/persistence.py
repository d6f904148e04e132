"""Persistence providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agriforum.config import Settings
from agriforum.domain.repository import (
    CommentRepository,
    PostRepository,
    UnitOfWork,
    VoteRepository,
)
from agriforum.persistence.database import create_engine, create_session_factory
from agriforum.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresVoteRepository,
)
from agriforum.persistence.unit_of_work import PostgresUnitOfWork
from agriforum.util.di.base import ProviderBase
from agriforum.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Storage for posts, the vote ledger and comments.

    Variants provide the repositories and the UnitOfWork that groups their
    writes; all of them must share one transaction per request.
    """

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL storage: one pooled engine, one session per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One session per request.

        Vote and comment writes commit inside their own unit of work. Plain
        inserts such as a new post are committed when the request ends, and
        rolled back if the handler raised.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Request session rolled back", error=str(e))
                await session.rollback()
                raise
            await session.commit()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        return PostgresUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        return PostgresCommentRepository(session)
