"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from agriforum.domain.model.comment import Comment
from agriforum.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are append-only: there is no update or delete path.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a post, oldest first.

        Args:
            post_id: The post ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments in creation order
        """
        pass

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Insert a comment row.

        Args:
            comment: The comment to insert

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments on a post."""
        pass
