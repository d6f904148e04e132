"""PostgreSQL repository implementations."""

from agriforum.persistence.repository.comment import PostgresCommentRepository
from agriforum.persistence.repository.post import PostgresPostRepository
from agriforum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
]
