"""Unit tests for CastVoteUseCase."""

from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from agriforum.application.usecase.vote.cast_vote import (
    CastVoteRequest,
    CastVoteUseCase,
)
from agriforum.domain.error import NotAuthenticatedError, NotFoundError
from agriforum.domain.repository import PostRepository, VoteRepository
from agriforum.domain.value import UserId, VoteState, VoteType
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_upvote_returns_new_counters(self, unit_env):
        """An upvote reports the caller's state and the post's counters."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(upvotes=0, downvotes=0))
        user_id = str(uuid4())

        # Act
        response = await use_case.execute(
            CastVoteRequest(post_id=str(post.id), user_id=user_id, vote_type="up")
        )

        # Assert
        assert response.post_id == str(post.id)
        assert response.vote_state == VoteState.UP
        assert (response.upvotes, response.downvotes, response.score) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_down_then_up_switches(self, unit_env):
        """Scenario B through the use case."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await post_repo.save(make_post())
        user_id = str(uuid4())
        await use_case.execute(
            CastVoteRequest(post_id=str(post.id), user_id=user_id, vote_type="down")
        )

        # Act
        response = await use_case.execute(
            CastVoteRequest(post_id=str(post.id), user_id=user_id, vote_type="up")
        )

        # Assert
        assert response.vote_state == VoteState.UP
        assert (response.upvotes, response.downvotes) == (1, 0)
        assert await vote_repo.count_by_post(post.id, VoteType.DOWN) == 0

    @pytest.mark.asyncio
    async def test_repeat_vote_toggles_off(self, unit_env):
        """Repeating a downvote removes it."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)
        post = await post_repo.save(make_post())
        user_id = str(uuid4())
        request = CastVoteRequest(
            post_id=str(post.id), user_id=user_id, vote_type=VoteType.DOWN
        )

        # Act
        await use_case.execute(request)
        response = await use_case.execute(request)

        # Assert
        assert response.vote_state == VoteState.NONE
        assert response.score == 0
        assert (
            await vote_repo.find_by_user_and_post(UserId(UUID(user_id)), post.id)
            is None
        )

    @pytest.mark.asyncio
    async def test_anonymous_request_raises(self, unit_env):
        """A request without a user is rejected."""
        use_case = await unit_env.get(CastVoteUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                CastVoteRequest(post_id=str(post.id), vote_type="up")
            )

    @pytest.mark.asyncio
    async def test_missing_post_raises(self, unit_env):
        """Voting on an unknown post is rejected."""
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                CastVoteRequest(
                    post_id=str(uuid4()), user_id=str(uuid4()), vote_type="up"
                )
            )

    def test_unknown_vote_type_rejected(self):
        """Only up and down are accepted."""
        with pytest.raises(PydanticValidationError):
            CastVoteRequest(post_id=str(uuid4()), user_id=str(uuid4()), vote_type="meh")
