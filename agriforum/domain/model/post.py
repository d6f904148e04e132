"""Post aggregate root.

Posts are farmer questions filed under a category. Each post caches its
engagement counters so listings never need to aggregate the vote ledger or
the comment table.
"""

from datetime import datetime

from pydantic import Field, field_validator

from agriforum.domain.model.common import DomainModel
from agriforum.domain.value import EngagementCounts, PostCategory, PostId, UserId


class Post(DomainModel):
    """Post aggregate root.

    Business rules:
    - upvotes equals the number of UP ledger entries for the post
    - downvotes equals the number of DOWN ledger entries for the post
    - comment_count equals the number of comments on the post
    - counters change only through the vote and comment services
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    category: PostCategory
    author_id: UserId
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only title or content."""
        if not v.strip():
            raise ValueError("Must not be blank")
        return v

    @property
    def score(self) -> int:
        """Net vote score (upvotes minus downvotes)."""
        return self.upvotes - self.downvotes

    @property
    def counts(self) -> EngagementCounts:
        """Snapshot of the cached engagement counters."""
        return EngagementCounts(
            upvotes=self.upvotes,
            downvotes=self.downvotes,
            comment_count=self.comment_count,
        )
