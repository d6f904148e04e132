"""Post domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from agriforum.domain.error import (
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)
from agriforum.domain.model.post import Post
from agriforum.domain.repository import PostRepository, PostSortOrder
from agriforum.domain.value import PostCategory, PostId, UserId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        author_id: Optional[UserId],
        title: str,
        content: str,
        category: PostCategory,
    ) -> Post:
        """Create a new forum post with zeroed engagement counters.

        Args:
            author_id: Authenticated author (None if the caller is anonymous)
            title: Post title
            content: Question body
            category: Forum category

        Returns:
            Created post

        Raises:
            NotAuthenticatedError: If there is no author
            ValidationError: If the title or content is empty, blank or too long
        """
        if author_id is None:
            raise NotAuthenticatedError("create posts")

        with logfire.span(
            "post_service.create_post",
            author_id=str(author_id),
            category=category.value,
        ):
            now = datetime.now()
            try:
                post = Post(
                    id=PostId(uuid4()),
                    title=title,
                    content=content,
                    category=category,
                    author_id=author_id,
                    upvotes=0,
                    downvotes=0,
                    comment_count=0,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                logfire.warn("Invalid post rejected", error=str(e))
                raise ValidationError(str(e)) from e
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id), title=saved.title)
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def require_post(self, post_id: PostId) -> Post:
        """Get a post by ID or raise.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def list_posts(
        self,
        sort: PostSortOrder = PostSortOrder.NEWEST,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> tuple[list[Post], int]:
        """List posts with filtering and pagination.

        Returns:
            Page of posts and the total number of matching posts
        """
        search = search.strip() if search else None
        with logfire.span(
            "post_service.list_posts",
            sort=sort.value,
            category=category.value if category else None,
            search=search,
            limit=limit,
            offset=offset,
        ):
            total = await self.post_repository.count(category=category, search=search)
            posts = await self.post_repository.find_all(
                sort=sort,
                category=category,
                search=search,
                limit=limit,
                offset=offset,
            )
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def apply_vote_delta(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Post:
        """Atomically apply vote counter deltas to a post.

        Uses SQL-level increments to avoid lost updates.

        Args:
            post_id: Post ID
            upvotes_delta: Change to upvotes
            downvotes_delta: Change to downvotes

        Returns:
            Post with updated counters

        Raises:
            NotFoundError: If the post disappeared before the update
        """
        with logfire.span(
            "post_service.apply_vote_delta",
            post_id=str(post_id),
            upvotes_delta=upvotes_delta,
            downvotes_delta=downvotes_delta,
        ):
            updated = await self.post_repository.apply_vote_delta(
                post_id, upvotes_delta, downvotes_delta
            )
            if updated is None:
                logfire.warn("Post vanished during vote update", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            logfire.info(
                "Post vote counters updated",
                post_id=str(post_id),
                upvotes=updated.upvotes,
                downvotes=updated.downvotes,
            )
            return updated

    async def increment_comment_count(self, post_id: PostId) -> Post:
        """Atomically increment a post's comment count.

        Args:
            post_id: Post ID

        Returns:
            Post with updated comment count

        Raises:
            NotFoundError: If the post disappeared before the update
        """
        with logfire.span("post_service.increment_comment_count", post_id=str(post_id)):
            updated = await self.post_repository.increment_comment_count(post_id)
            if updated is None:
                logfire.error(
                    "Post not found for comment count increment", post_id=str(post_id)
                )
                raise NotFoundError("Post", str(post_id))

            logfire.info(
                "Comment count incremented",
                post_id=str(post_id),
                new_count=updated.comment_count,
            )
            return updated
