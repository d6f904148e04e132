"""Domain value objects for AgriForum."""

from agriforum.domain.value.identifiers import (
    CommentId,
    PostId,
    UserId,
    VoteId,
)
from agriforum.domain.value.types import (
    EngagementCounts,
    PostCategory,
    VoteState,
    VoteTransition,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    # Types
    "PostCategory",
    "VoteType",
    "VoteState",
    "VoteTransition",
    "EngagementCounts",
]
