"""Comment domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from agriforum.config import EngagementSettings
from agriforum.domain.error import NotAuthenticatedError, ValidationError
from agriforum.domain.model.comment import Comment
from agriforum.domain.model.post import Post
from agriforum.domain.repository import CommentRepository, UnitOfWork
from agriforum.domain.value import CommentId, PostId, UserId

from .base import Service
from .post_service import PostService
from .retry import RetryPolicy, translate_storage_errors

MAX_COMMENT_LENGTH = 10000


@dataclass
class CommentOutcome:
    """A stored comment together with its post's updated counters."""

    comment: Comment
    post: Post

    @property
    def comment_count(self) -> int:
        return self.post.comment_count


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        unit_of_work: UnitOfWork,
        engagement_settings: EngagementSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_service: Post domain service
            unit_of_work: Transaction boundary shared with the repositories
            engagement_settings: Retry configuration
        """
        self.comment_repository = comment_repository
        self.post_service = post_service
        self.unit_of_work = unit_of_work
        self.retry_policy = RetryPolicy.from_settings(engagement_settings)

    async def add_comment(
        self,
        post_id: PostId,
        author_id: Optional[UserId],
        content: str,
    ) -> CommentOutcome:
        """Append a comment to a post and bump its comment count.

        The insert and the increment commit together or not at all.

        Args:
            post_id: Post ID
            author_id: Authenticated author (None if the caller is anonymous)
            content: Comment text

        Returns:
            The stored comment and the post with its new comment_count

        Raises:
            NotAuthenticatedError: If there is no author
            ValidationError: If the text is empty, blank or too long
            NotFoundError: If the post does not exist at write time
            StorageUnavailableError: If the store could not be reached
        """
        if author_id is None:
            logfire.warn("Anonymous comment rejected", post_id=str(post_id))
            raise NotAuthenticatedError("comment")

        if not content or not content.strip():
            raise ValidationError("Comment content must not be empty")
        if len(content) > MAX_COMMENT_LENGTH:
            raise ValidationError(
                f"Comment content must be at most {MAX_COMMENT_LENGTH} characters"
            )

        with logfire.span(
            "comment_service.add_comment",
            post_id=str(post_id),
            author_id=str(author_id),
        ):
            outcome = await self.retry_policy.run(
                lambda: self._add_comment_once(post_id, author_id, content),
                name="add_comment",
            )
            logfire.info(
                "Comment added",
                comment_id=str(outcome.comment.id),
                post_id=str(post_id),
                comment_count=outcome.comment_count,
            )
            return outcome

    async def _add_comment_once(
        self, post_id: PostId, author_id: UserId, content: str
    ) -> CommentOutcome:
        with translate_storage_errors("add_comment", post_id):
            async with self.unit_of_work.transaction():
                await self.post_service.require_post(post_id)

                comment = await self.comment_repository.create(
                    Comment(
                        id=CommentId(uuid4()),
                        post_id=post_id,
                        author_id=author_id,
                        content=content,
                        created_at=datetime.now(),
                    )
                )
                post = await self.post_service.increment_comment_count(post_id)
                return CommentOutcome(comment=comment, post=post)

    async def get_comments_for_post(
        self, post_id: PostId, limit: int = 100, offset: int = 0
    ) -> list[Comment]:
        """Get comments on a post, oldest first.

        Args:
            post_id: Post ID
            limit: Maximum number of comments
            offset: Number of comments to skip

        Returns:
            Comments in creation order

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            limit=limit,
            offset=offset,
        ):
            await self.post_service.require_post(post_id)
            comments = await self.comment_repository.find_by_post(
                post_id, limit=limit, offset=offset
            )
            logfire.info(
                "Comments fetched", post_id=str(post_id), count=len(comments)
            )
            return comments
