"""Comment entity.

Comments are flat, append-only replies to a forum post.
"""

from datetime import datetime

from pydantic import Field, field_validator

from agriforum.domain.model.common import DomainModel
from agriforum.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a reply to a post. Comments are never edited or deleted,
    so every stored comment counts towards its post's comment_count.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=10000)
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only replies."""
        if not v.strip():
            raise ValueError("Comment content must not be blank")
        return v
