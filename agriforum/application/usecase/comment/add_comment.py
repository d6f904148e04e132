"""Add comment use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from agriforum.application.usecase.base import BaseUseCase
from agriforum.domain.service import CommentService
from agriforum.domain.value import PostId, UserId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    post_id: str  # UUID string
    content: str
    author_id: Optional[str] = None  # User ID from authenticated user


class AddCommentResponse(BaseModel):
    """Add comment response."""

    comment_id: str
    post_id: str
    author_id: str
    content: str
    created_at: datetime
    comment_count: int  # Post's comment count including this comment


class AddCommentUseCase(BaseUseCase):
    """Use case for replying to a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        The comment insert and the post's comment_count increment happen in
        one unit of work inside the comment service.

        Args:
            request: Add comment request

        Returns:
            Stored comment and the post's new comment count

        Raises:
            NotAuthenticatedError: If the request has no author
            ValidationError: If the content is empty or too long
            NotFoundError: If the post does not exist
        """
        author_id = UserId(UUID(request.author_id)) if request.author_id else None
        outcome = await self.comment_service.add_comment(
            post_id=PostId(UUID(request.post_id)),
            author_id=author_id,
            content=request.content,
        )
        comment = outcome.comment

        return AddCommentResponse(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            created_at=comment.created_at,
            comment_count=outcome.comment_count,
        )
