"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from agriforum.application.usecase.base import BaseUseCase
from agriforum.domain.service import CommentService
from agriforum.domain.value import PostId


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    created_at: datetime


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    post_id: str  # UUID string
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    comments: list[CommentItem]
    total: int


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing a post's comments, oldest first."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Get comments request with post ID and pagination

        Returns:
            Comments in creation order

        Raises:
            NotFoundError: If the post does not exist
        """
        comments = await self.comment_service.get_comments_for_post(
            post_id=PostId(UUID(request.post_id)),
            limit=request.limit,
            offset=request.offset,
        )

        comment_items = [
            CommentItem(
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                author_id=str(comment.author_id),
                content=comment.content,
                created_at=comment.created_at,
            )
            for comment in comments
        ]

        return GetCommentsResponse(
            post_id=request.post_id,
            comments=comment_items,
            total=len(comment_items),
        )
