"""Mock persistence providers for testing."""

from dishka import Scope, provide

from agriforum.domain.repository import (
    CommentRepository,
    PostRepository,
    UnitOfWork,
    VoteRepository,
)
from agriforum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
    InMemoryVoteRepository,
)
from agriforum.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store is APP-scoped, so every request made through one container
    sees the same data; each test builds its own container for isolation.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory tables."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, store: InMemoryStore) -> UnitOfWork:
        """Provide in-memory unit of work."""
        return InMemoryUnitOfWork(store)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, store: InMemoryStore) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, store: InMemoryStore) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, store: InMemoryStore) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(store)
