"""Vote ledger repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from agriforum.domain.model.vote import Vote
from agriforum.domain.value import PostId, UserId, VoteType


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Writes are compare-and-set against the state the caller read, so two
    interleaved transitions for the same (user, post) cannot both succeed.
    """

    @abstractmethod
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's ledger entry on a post.

        Args:
            user_id: The user's ID
            post_id: The post's ID

        Returns:
            The ledger entry if the user has voted, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> Dict[PostId, VoteType]:
        """Find a user's votes on multiple posts (batch query).

        Args:
            user_id: The user's ID
            post_ids: Posts to check

        Returns:
            Mapping of post ID to vote type for posts the user voted on
        """
        pass

    @abstractmethod
    async def create(self, vote: Vote) -> Vote:
        """Create a ledger entry.

        Raises:
            IntegrityError: If the user already has an entry for the post
        """
        pass

    @abstractmethod
    async def update_vote_type(
        self,
        user_id: UserId,
        post_id: PostId,
        expected: VoteType,
        new: VoteType,
    ) -> bool:
        """Switch an entry's vote type if it still holds the expected type.

        Returns:
            True if the entry was updated, False if it changed underneath us
        """
        pass

    @abstractmethod
    async def delete_by_user_and_post(
        self, user_id: UserId, post_id: PostId, expected: VoteType
    ) -> bool:
        """Delete an entry if it still holds the expected type.

        Returns:
            True if the entry was deleted, False if it changed underneath us
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId, vote_type: VoteType) -> int:
        """Count ledger entries of one type on a post."""
        pass
