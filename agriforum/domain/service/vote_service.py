"""Vote domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire

from agriforum.config import EngagementSettings
from agriforum.domain.error import ConflictRetryableError, NotAuthenticatedError
from agriforum.domain.model.post import Post
from agriforum.domain.model.vote import Vote
from agriforum.domain.repository import UnitOfWork, VoteRepository
from agriforum.domain.value import (
    PostId,
    UserId,
    VoteId,
    VoteState,
    VoteTransition,
    VoteType,
)

from .base import Service
from .post_service import PostService
from .retry import RetryPolicy, translate_storage_errors
from .vote_transition import compute_transition


@dataclass
class VoteOutcome:
    """Result of a settled vote: the transition applied and the updated post."""

    transition: VoteTransition
    post: Post

    @property
    def vote_state(self) -> VoteState:
        """The caller's ledger state after the vote."""
        return self.transition.next


class VoteService(Service):
    """Domain service for vote operations.

    Keeps the post's vote counters equal to the aggregation over the vote
    ledger: the ledger write and the counter update for one request happen
    in a single unit of work, and ledger writes are compare-and-set so that
    racing requests from the same user serialize.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        unit_of_work: UnitOfWork,
        engagement_settings: EngagementSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote ledger repository
            post_service: Post domain service
            unit_of_work: Transaction boundary shared with the repositories
            engagement_settings: Retry configuration
        """
        self.vote_repository = vote_repository
        self.post_service = post_service
        self.unit_of_work = unit_of_work
        self.retry_policy = RetryPolicy.from_settings(engagement_settings)

    async def cast_vote(
        self,
        post_id: PostId,
        user_id: Optional[UserId],
        vote_type: VoteType,
    ) -> VoteOutcome:
        """Cast, switch or toggle off a user's vote on a post.

        Repeating the vote the user already holds removes it.

        Args:
            post_id: Post ID
            user_id: Authenticated user (None if the caller is anonymous)
            vote_type: Requested vote

        Returns:
            The applied transition and the post with updated counters

        Raises:
            NotAuthenticatedError: If there is no user (nothing is written)
            NotFoundError: If the post does not exist
            ConflictRetryableError: If concurrent writes kept invalidating the read
            CounterDriftError: If the cached counters already disagree with the
                ledger so that the delta would make one negative
            StorageUnavailableError: If the store could not be reached
        """
        if user_id is None:
            logfire.warn("Anonymous vote rejected", post_id=str(post_id))
            raise NotAuthenticatedError("vote")

        with logfire.span(
            "vote_service.cast_vote",
            post_id=str(post_id),
            user_id=str(user_id),
            vote_type=vote_type.value,
        ):
            outcome = await self.retry_policy.run(
                lambda: self._cast_vote_once(post_id, user_id, vote_type),
                name="cast_vote",
            )
            logfire.info(
                "Vote settled",
                post_id=str(post_id),
                user_id=str(user_id),
                previous=outcome.transition.previous.value,
                next=outcome.transition.next.value,
                upvotes=outcome.post.upvotes,
                downvotes=outcome.post.downvotes,
            )
            return outcome

    async def _cast_vote_once(
        self, post_id: PostId, user_id: UserId, vote_type: VoteType
    ) -> VoteOutcome:
        """Single attempt: read ledger, compute transition, persist both writes."""
        with translate_storage_errors("cast_vote", post_id):
            async with self.unit_of_work.transaction():
                await self.post_service.require_post(post_id)

                existing = await self.vote_repository.find_by_user_and_post(
                    user_id, post_id
                )
                current = existing.state if existing else VoteState.NONE
                transition = compute_transition(current, vote_type)

                await self._write_ledger(user_id, post_id, transition)

                post = await self.post_service.apply_vote_delta(
                    post_id, transition.upvotes_delta, transition.downvotes_delta
                )
                return VoteOutcome(transition=transition, post=post)

    async def _write_ledger(
        self, user_id: UserId, post_id: PostId, transition: VoteTransition
    ) -> None:
        """Make the ledger match ``transition.next``, guarded by ``previous``."""
        previous = transition.previous.as_vote_type()
        target = transition.next.as_vote_type()

        if previous is None and target is not None:
            # Unique (user, post) constraint rejects a racing first vote
            now = datetime.now()
            await self.vote_repository.create(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    post_id=post_id,
                    vote_type=target,
                    created_at=now,
                    updated_at=now,
                )
            )
            return

        if previous is not None and target is None:
            written = await self.vote_repository.delete_by_user_and_post(
                user_id, post_id, expected=previous
            )
        elif previous is not None and target is not None:
            written = await self.vote_repository.update_vote_type(
                user_id, post_id, expected=previous, new=target
            )
        else:
            # NONE -> NONE is not a transition the engine produces
            raise ValueError("Vote transition must change the ledger")

        if not written:
            logfire.warn(
                "Ledger changed underneath vote",
                post_id=str(post_id),
                user_id=str(user_id),
                expected=previous.value,
            )
            raise ConflictRetryableError("Vote changed concurrently, retry")

    async def get_vote_state(
        self, user_id: Optional[UserId], post_id: PostId
    ) -> VoteState:
        """Get a user's current vote on a post (NONE for anonymous callers)."""
        if user_id is None:
            return VoteState.NONE

        vote = await self.vote_repository.find_by_user_and_post(user_id, post_id)
        return vote.state if vote else VoteState.NONE

    async def get_vote_states(
        self, user_id: Optional[UserId], post_ids: Sequence[PostId]
    ) -> dict[PostId, VoteState]:
        """Get a user's vote state on several posts.

        Args:
            user_id: User ID (None for anonymous callers)
            post_ids: Posts to check

        Returns:
            Mapping of every requested post ID to the user's vote state
        """
        if user_id is None or not post_ids:
            return {post_id: VoteState.NONE for post_id in post_ids}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_posts(user_id, post_ids)
        return {
            post_id: VoteState.from_vote_type(votes.get(post_id))
            for post_id in post_ids
        }
