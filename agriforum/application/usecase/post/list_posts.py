"""List posts use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from agriforum.domain.repository import PostSortOrder
from agriforum.domain.service import PostService, VoteService
from agriforum.domain.value import PostCategory, UserId, VoteState

from .common import PostItem


class ListPostsRequest(BaseModel):
    """List posts request."""

    sort: PostSortOrder = PostSortOrder.NEWEST
    category: Optional[PostCategory] = None
    search: Optional[str] = None  # Matched against title and content
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: Optional[str] = None  # Current user ID (if authenticated)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total: int
    limit: int
    offset: int


class ListPostsUseCase:
    """Use case for listing posts with filtering and pagination."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with filters and pagination

        Returns:
            Page of posts, each with the caller's vote state
        """
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            category=request.category.value if request.category else None,
            limit=request.limit,
            offset=request.offset,
        ):
            posts, total = await self.post_service.list_posts(
                sort=request.sort,
                category=request.category,
                search=request.search,
                limit=request.limit,
                offset=request.offset,
            )

            # Batch query for the caller's votes (avoid N+1)
            user_id = UserId(UUID(request.user_id)) if request.user_id else None
            vote_states = await self.vote_service.get_vote_states(
                user_id, [post.id for post in posts]
            )

            items = [
                PostItem.from_post(post, vote_states.get(post.id, VoteState.NONE))
                for post in posts
            ]

            return ListPostsResponse(
                posts=items,
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
