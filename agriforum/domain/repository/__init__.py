"""Repository interfaces for AgriForum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from agriforum.domain.repository.comment import CommentRepository
from agriforum.domain.repository.post import PostRepository, PostSortOrder
from agriforum.domain.repository.unit_of_work import UnitOfWork
from agriforum.domain.repository.vote import VoteRepository

__all__ = [
    "PostRepository",
    "PostSortOrder",
    "CommentRepository",
    "VoteRepository",
    "UnitOfWork",
]
