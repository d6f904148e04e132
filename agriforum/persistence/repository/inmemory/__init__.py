"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .store import ConstraintViolation, InMemoryStore, integrity_error
from .unit_of_work import InMemoryUnitOfWork
from .vote import InMemoryVoteRepository

__all__ = [
    "ConstraintViolation",
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
    "InMemoryVoteRepository",
    "integrity_error",
]
