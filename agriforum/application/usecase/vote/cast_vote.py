"""Cast vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from agriforum.application.usecase.base import BaseUseCase
from agriforum.domain.service import VoteService
from agriforum.domain.value import PostId, UserId, VoteState, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    post_id: str  # UUID string
    user_id: Optional[str] = None  # User ID from authenticated user
    vote_type: VoteType


class CastVoteResponse(BaseModel):
    """Cast vote response.

    Carries the caller's new vote state and the post's counters as they
    stood right after this vote committed.
    """

    post_id: str
    vote_state: VoteState
    upvotes: int
    downvotes: int
    score: int


class CastVoteUseCase(BaseUseCase):
    """Use case for voting on a post (repeat the same vote to remove it)."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            New vote state and updated counters

        Raises:
            NotAuthenticatedError: If the request has no user
            NotFoundError: If the post does not exist
            ConflictRetryableError: If concurrent writes kept conflicting
            StorageUnavailableError: If the store could not be reached
        """
        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        outcome = await self.vote_service.cast_vote(
            post_id=PostId(UUID(request.post_id)),
            user_id=user_id,
            vote_type=request.vote_type,
        )

        return CastVoteResponse(
            post_id=str(outcome.post.id),
            vote_state=outcome.vote_state,
            upvotes=outcome.post.upvotes,
            downvotes=outcome.post.downvotes,
            score=outcome.post.score,
        )
