"""Create post use case."""

from typing import Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from agriforum.domain.service import PostService
from agriforum.domain.value import PostCategory, UserId

from .common import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    title: str
    content: str
    category: PostCategory = PostCategory.GENERAL
    author_id: Optional[str] = None  # User ID from authenticated user


class CreatePostResponse(PostItem):
    """Create post response."""


class CreatePostUseCase:
    """Use case for asking a new question in the forum."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            The new post with zeroed counters

        Raises:
            NotAuthenticatedError: If the request has no author
            ValidationError: If title or content is invalid
        """
        author_id = UserId(UUID(request.author_id)) if request.author_id else None

        with logfire.span("create_post.execute", category=request.category.value):
            post = await self.post_service.create_post(
                author_id=author_id,
                title=request.title,
                content=request.content,
                category=request.category,
            )
            return CreatePostResponse(**PostItem.from_post(post).model_dump())
