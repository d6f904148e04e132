"""Get post use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from agriforum.domain.service import PostService, VoteService
from agriforum.domain.value import PostId, UserId

from .common import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: Optional[str] = None  # Current user ID (if authenticated)


class GetPostResponse(PostItem):
    """Get post response."""


class GetPostUseCase:
    """Use case for retrieving a post with the caller's vote state."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Args:
            request: Get post request with post ID and optional user ID

        Returns:
            Post details

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.require_post(PostId(UUID(request.post_id)))

        user_id = UserId(UUID(request.user_id)) if request.user_id else None
        vote_state = await self.vote_service.get_vote_state(user_id, post.id)

        return GetPostResponse(**PostItem.from_post(post, vote_state).model_dump())
