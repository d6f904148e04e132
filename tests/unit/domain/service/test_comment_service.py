"""Unit tests for CommentService."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from agriforum.config import EngagementSettings
from agriforum.domain.error import (
    NotAuthenticatedError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from agriforum.domain.repository import CommentRepository, PostRepository
from agriforum.domain.service import CommentService, PostService
from agriforum.domain.service.comment_service import MAX_COMMENT_LENGTH
from agriforum.domain.value import PostId, UserId
from agriforum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryStore,
    InMemoryUnitOfWork,
)
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestAddComment:
    """Tests for add_comment."""

    @pytest.mark.asyncio
    async def test_first_comment_increments_count(self, unit_env):
        """The first comment on a post sets the count to one."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())
        author_id = UserId(uuid4())

        # Act
        outcome = await comment_service.add_comment(
            post.id, author_id, "Try a split application of urea."
        )

        # Assert
        assert outcome.comment_count == 1
        assert outcome.comment.author_id == author_id
        assert outcome.comment.post_id == post.id
        assert await comment_repo.count_by_post(post.id) == 1

    @pytest.mark.asyncio
    async def test_comment_on_discussed_post(self, unit_env):
        """Scenario C: a post with three comments gains a fourth from U3."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post(comment_count=3))
        for _ in range(3):
            await comment_repo.create(make_comment(post.id))
        u3 = UserId(uuid4())

        # Act
        outcome = await comment_service.add_comment(
            post.id, u3, "Mulch kept our soil moist through the dry spell."
        )

        # Assert
        assert outcome.comment_count == 4
        stored = await post_repo.find_by_id(post.id)
        assert stored.comment_count == 4
        assert await comment_repo.count_by_post(post.id) == 4
        comment = await comment_repo.find_by_id(outcome.comment.id)
        assert comment is not None
        assert (comment.post_id, comment.author_id) == (post.id, u3)

    @pytest.mark.asyncio
    async def test_count_matches_comment_rows(self, unit_env):
        """comment_count tracks the number of stored comments."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())

        # Act
        for i in range(5):
            await comment_service.add_comment(post.id, UserId(uuid4()), f"Reply {i}")

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert stored.comment_count == 5
        assert await comment_repo.count_by_post(post.id) == 5

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   ", "\n\t "])
    async def test_blank_content_rejected(self, unit_env, content):
        """Empty or whitespace-only text is rejected before any write."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        post = await post_repo.save(make_post())

        # Act / Assert
        with pytest.raises(ValidationError):
            await comment_service.add_comment(post.id, UserId(uuid4()), content)

        assert await comment_repo.count_by_post(post.id) == 0
        assert (await post_repo.find_by_id(post.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_overlong_content_rejected(self, unit_env):
        """Text longer than the limit is rejected."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act / Assert
        with pytest.raises(ValidationError):
            await comment_service.add_comment(
                post.id, UserId(uuid4()), "a" * (MAX_COMMENT_LENGTH + 1)
            )

    @pytest.mark.asyncio
    async def test_anonymous_comment_rejected(self, unit_env):
        """Commenting without a user raises NotAuthenticatedError."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act / Assert
        with pytest.raises(NotAuthenticatedError):
            await comment_service.add_comment(post.id, None, "Helpful reply")

        assert (await post_repo.find_by_id(post.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_comment_on_missing_post_raises_not_found(self, unit_env):
        """Commenting on a post that does not exist raises NotFoundError."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())

        # Act / Assert
        with pytest.raises(NotFoundError):
            await comment_service.add_comment(post_id, UserId(uuid4()), "Anyone?")

        assert await comment_repo.count_by_post(post_id) == 0

    @pytest.mark.asyncio
    async def test_failed_increment_rolls_back_comment(self):
        """A failed counter write leaves no orphan comment behind."""

        # Arrange
        class UnreachablePostRepository(InMemoryPostRepository):
            async def increment_comment_count(self, post_id):
                raise OperationalError(
                    "UPDATE forum_posts", {}, Exception("connection reset")
                )

        store = InMemoryStore()
        post_repo = UnreachablePostRepository(store)
        comment_repo = InMemoryCommentRepository(store)
        comment_service = CommentService(
            comment_repository=comment_repo,
            post_service=PostService(post_repo),
            unit_of_work=InMemoryUnitOfWork(store),
            engagement_settings=EngagementSettings(backoff_base_seconds=0.0),
        )
        post = await post_repo.save(make_post())

        # Act
        with pytest.raises(StorageUnavailableError):
            await comment_service.add_comment(post.id, UserId(uuid4()), "Lost?")

        # Assert
        assert await comment_repo.count_by_post(post.id) == 0
        assert (await post_repo.find_by_id(post.id)).comment_count == 0


class TestGetComments:
    """Tests for get_comments_for_post."""

    @pytest.mark.asyncio
    async def test_comments_returned_oldest_first(self, unit_env):
        """Comments come back in the order they were added."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        for text in ["first", "second", "third"]:
            await comment_service.add_comment(post.id, UserId(uuid4()), text)

        # Act
        comments = await comment_service.get_comments_for_post(post.id)

        # Assert
        assert [c.content for c in comments] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        """limit and offset page through the thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        for i in range(4):
            await comment_service.add_comment(post.id, UserId(uuid4()), f"c{i}")

        # Act
        page = await comment_service.get_comments_for_post(post.id, limit=2, offset=1)

        # Assert
        assert [c.content for c in page] == ["c1", "c2"]

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        """Listing comments of an unknown post raises NotFoundError."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.get_comments_for_post(PostId(uuid4()))
