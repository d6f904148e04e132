"""Post repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from agriforum.domain.model.post import Post
from agriforum.domain.value import EngagementCounts, PostCategory, PostId


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    NEWEST = "newest"  # Sort by created_at DESC
    MOST_VOTED = "most_voted"  # Sort by upvotes - downvotes DESC


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID and lock it until the unit of work ends.

        Concurrent counter updates on the post wait for the lock, so
        counters recomputed under it cannot be overtaken by a vote.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.NEWEST,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination.

        Args:
            sort: Sort order (newest or most voted)
            category: Filter by category (None for all categories)
            search: Case-insensitive substring matched against title and content
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        pass

    @abstractmethod
    async def list_ids(self) -> List[PostId]:
        """List the IDs of every post (used by counter reconciliation)."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a new post.

        Counters on a new post are always stored as given; after creation
        they change only through the atomic counter methods below.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def apply_vote_delta(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Post]:
        """Atomically add deltas to the vote counters.

        Uses a storage-level increment (never read-modify-write in
        application code) so concurrent voters cannot lose updates.

        Args:
            post_id: The post ID
            upvotes_delta: Amount to add to upvotes (may be negative)
            downvotes_delta: Amount to add to downvotes (may be negative)

        Returns:
            The updated post, or None if the post no longer exists
        """
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId) -> Optional[Post]:
        """Atomically increment comment_count by 1.

        Args:
            post_id: The post ID

        Returns:
            The updated post, or None if the post no longer exists
        """
        pass

    @abstractmethod
    async def overwrite_counts(
        self, post_id: PostId, counts: EngagementCounts
    ) -> Optional[Post]:
        """Overwrite all cached counters with recomputed values.

        Only the reconciliation path may call this, inside a unit of work
        that also read the source tables.

        Args:
            post_id: The post ID
            counts: Counters recomputed from the ledger and comment table

        Returns:
            The updated post, or None if the post no longer exists
        """
        pass
