"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from agriforum.domain.model.vote import Vote
from agriforum.domain.repository.vote import VoteRepository
from agriforum.domain.value import PostId, UserId, VoteType

from .store import InMemoryStore, integrity_error


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's ledger entry on a post."""
        return self.store.votes.get((user_id, post_id))

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> dict[PostId, VoteType]:
        """Find a user's votes on multiple posts (batch query)."""
        result: dict[PostId, VoteType] = {}
        for post_id in post_ids:
            vote = self.store.votes.get((user_id, post_id))
            if vote is not None:
                result[post_id] = vote.vote_type
        return result

    async def create(self, vote: Vote) -> Vote:
        """Create a ledger entry.

        Raises:
            IntegrityError: If the user already voted on the post
        """
        key = (vote.user_id, vote.post_id)
        if key in self.store.votes:
            raise integrity_error("INSERT forum_votes", "duplicate vote", "23505")
        self.store.votes[key] = vote
        return vote

    async def update_vote_type(
        self,
        user_id: UserId,
        post_id: PostId,
        expected: VoteType,
        new: VoteType,
    ) -> bool:
        """Switch an entry's vote type if it still holds the expected type."""
        vote = self.store.votes.get((user_id, post_id))
        if vote is None or vote.vote_type != expected:
            return False
        self.store.votes[(user_id, post_id)] = vote.model_copy(
            update={"vote_type": new}
        )
        return True

    async def delete_by_user_and_post(
        self, user_id: UserId, post_id: PostId, expected: VoteType
    ) -> bool:
        """Delete an entry if it still holds the expected type."""
        vote = self.store.votes.get((user_id, post_id))
        if vote is None or vote.vote_type != expected:
            return False
        del self.store.votes[(user_id, post_id)]
        return True

    async def count_by_post(self, post_id: PostId, vote_type: VoteType) -> int:
        """Count ledger entries of one type on a post."""
        return sum(
            1
            for vote in self.store.votes.values()
            if vote.post_id == post_id and vote.vote_type == vote_type
        )
