"""In-memory comment repository for testing."""

from typing import Optional

from agriforum.domain.model.comment import Comment
from agriforum.domain.repository.comment import CommentRepository
from agriforum.domain.value import CommentId, PostId

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        for comment in self.store.comments:
            if comment.id == comment_id:
                return comment
        return None

    async def find_by_post(
        self,
        post_id: PostId,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments on a post, oldest first."""
        # Stable sort keeps insertion order for equal timestamps
        comments = sorted(
            (c for c in self.store.comments if c.post_id == post_id),
            key=lambda c: c.created_at,
        )
        return comments[offset : offset + limit]

    async def create(self, comment: Comment) -> Comment:
        """Append a comment."""
        self.store.comments.append(comment)
        return comment

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments on a post."""
        return sum(1 for c in self.store.comments if c.post_id == post_id)
