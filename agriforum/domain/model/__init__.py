"""Domain model entities for AgriForum."""

from agriforum.domain.model.comment import Comment
from agriforum.domain.model.post import Post
from agriforum.domain.model.vote import Vote

__all__ = [
    "Post",
    "Comment",
    "Vote",
]
