"""Integration tests for the engagement write paths on PostgreSQL.

Assumes PostgreSQL is reachable at DATABASE__URL with migrations applied.
"""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from agriforum.domain.error import NotFoundError
from agriforum.domain.model import Post
from agriforum.domain.repository import (
    CommentRepository,
    PostRepository,
    VoteRepository,
)
from agriforum.domain.service import (
    CommentService,
    EngagementService,
    VoteService,
)
from agriforum.domain.value import PostId, UserId, VoteState, VoteType
from agriforum.persistence.repository import (
    PostgresCommentRepository,
    PostgresPostRepository,
    PostgresVoteRepository,
)
from agriforum.persistence.unit_of_work import PostgresUnitOfWork
from tests.conftest import make_post
from tests.di import build_test_container
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence, assumes postgres running
integration_env = create_env_fixture(unmock={"persistence"})


class TestVoteIntegration:
    """Vote ledger and counters against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_vote_sequence_keeps_counters_in_sync(self, integration_env):
        """Counters equal the ledger after create, switch and toggle-off."""
        # Arrange
        vote_service = await integration_env.get(VoteService)
        post_repo = await integration_env.get(PostRepository)
        vote_repo = await integration_env.get(VoteRepository)
        post = await post_repo.save(make_post())
        alice, bob = UserId(uuid4()), UserId(uuid4())

        # Act
        await vote_service.cast_vote(post.id, alice, VoteType.DOWN)
        await vote_service.cast_vote(post.id, bob, VoteType.UP)
        await vote_service.cast_vote(post.id, alice, VoteType.UP)
        outcome = await vote_service.cast_vote(post.id, bob, VoteType.UP)

        # Assert
        assert outcome.vote_state == VoteState.NONE
        assert (outcome.post.upvotes, outcome.post.downvotes) == (1, 0)
        assert await vote_repo.count_by_post(post.id, VoteType.UP) == 1
        assert await vote_repo.count_by_post(post.id, VoteType.DOWN) == 0
        entry = await vote_repo.find_by_user_and_post(alice, post.id)
        assert entry.vote_type == VoteType.UP

    @pytest.mark.asyncio
    async def test_vote_on_missing_post(self, integration_env):
        """Voting on an unknown post writes nothing."""
        vote_service = await integration_env.get(VoteService)
        vote_repo = await integration_env.get(VoteRepository)
        post_id, user_id = PostId(uuid4()), UserId(uuid4())

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(post_id, user_id, VoteType.UP)

        assert await vote_repo.find_by_user_and_post(user_id, post_id) is None


class TestCommentIntegration:
    """Comment append against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_comment_and_count_commit_together(self, integration_env):
        """Scenario C against the real schema."""
        # Arrange
        comment_service = await integration_env.get(CommentService)
        post_repo = await integration_env.get(PostRepository)
        comment_repo = await integration_env.get(CommentRepository)
        post = await post_repo.save(make_post())

        # Act
        outcome = await comment_service.add_comment(
            post.id, UserId(uuid4()), "Rotate with legumes next season."
        )

        # Assert
        assert outcome.comment_count == 1
        assert await comment_repo.count_by_post(post.id) == 1
        comments = await comment_repo.find_by_post(post.id)
        assert [c.id for c in comments] == [outcome.comment.id]


class TestReconcileIntegration:
    """Reconciliation against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_drift_is_repaired(self, integration_env):
        """Counters seeded without ledger rows are reset."""
        engagement_service = await integration_env.get(EngagementService)
        post_repo = await integration_env.get(PostRepository)
        post = await post_repo.save(make_post(upvotes=5, comment_count=2))

        result = await engagement_service.reconcile_post(post.id)

        assert result.drifted
        repaired = await post_repo.find_by_id(post.id)
        assert (repaired.upvotes, repaired.comment_count) == (0, 0)


class TestConcurrentVotesIntegration:
    """Concurrent requests, each with its own session."""

    @pytest.mark.asyncio
    async def test_distinct_voters_lose_no_updates(self):
        """N concurrent upvotes from N users yield exactly N."""
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as request_container:
                post_repo = await request_container.get(PostRepository)
                post: Post = await post_repo.save(make_post())

            async def vote(user_id: UserId) -> None:
                async with container() as request_container:
                    vote_service = await request_container.get(VoteService)
                    await vote_service.cast_vote(post.id, user_id, VoteType.UP)

            voters = [UserId(uuid4()) for _ in range(10)]
            await asyncio.gather(*(vote(user_id) for user_id in voters))

            async with container() as request_container:
                post_repo = await request_container.get(PostRepository)
                stored = await post_repo.find_by_id(post.id)
            assert stored.upvotes == len(voters)
        finally:
            await container.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "first,second",
        [(VoteType.UP, VoteType.UP), (VoteType.UP, VoteType.DOWN)],
    )
    async def test_same_user_concurrent_votes_keep_counters_in_sync(
        self, first, second
    ):
        """Racing requests from one user settle on a state the ledger agrees with."""
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as request_container:
                post_repo = await request_container.get(PostRepository)
                post: Post = await post_repo.save(make_post())
            user_id = UserId(uuid4())

            async def vote(vote_type: VoteType) -> VoteState:
                async with container() as request_container:
                    vote_service = await request_container.get(VoteService)
                    outcome = await vote_service.cast_vote(
                        post.id, user_id, vote_type
                    )
                    return outcome.vote_state

            states = await asyncio.gather(vote(first), vote(second))

            async with container() as request_container:
                post_repo = await request_container.get(PostRepository)
                vote_repo = await request_container.get(VoteRepository)
                stored = await post_repo.find_by_id(post.id)
                ledger = (
                    await vote_repo.count_by_post(post.id, VoteType.UP),
                    await vote_repo.count_by_post(post.id, VoteType.DOWN),
                )
                entry = await vote_repo.find_by_user_and_post(user_id, post.id)

            assert (stored.upvotes, stored.downvotes) == ledger
            assert sum(ledger) <= 1
            final = entry.state if entry else VoteState.NONE
            # The request applied last decides the final state
            assert final in states
            if first == second:
                assert final == VoteState.NONE
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_vote_during_repair_is_not_lost(self):
        """A vote arriving while a drifted post is repaired still counts."""
        container = build_test_container(unmock={"persistence"})
        try:
            async with container() as request_container:
                post_repo = await request_container.get(PostRepository)
                post: Post = await post_repo.save(make_post(comment_count=2))
            voter = UserId(uuid4())
            pending: list[asyncio.Task] = []

            async def vote() -> None:
                async with container() as request_container:
                    vote_service = await request_container.get(VoteService)
                    await vote_service.cast_vote(post.id, voter, VoteType.UP)

            class InterleavingVoteRepository(PostgresVoteRepository):
                async def count_by_post(self, post_id, vote_type):
                    count = await super().count_by_post(post_id, vote_type)
                    if vote_type == VoteType.UP and not pending:
                        # Start a vote between the UP and DOWN counts and give
                        # it time to commit unless the repair holds it back
                        pending.append(asyncio.create_task(vote()))
                        await asyncio.sleep(0.3)
                    return count

            async with container() as request_container:
                session = await request_container.get(AsyncSession)
                engagement_service = EngagementService(
                    post_repository=PostgresPostRepository(session),
                    vote_repository=InterleavingVoteRepository(session),
                    comment_repository=PostgresCommentRepository(session),
                    unit_of_work=PostgresUnitOfWork(session),
                )
                result = await engagement_service.reconcile_post(post.id)
            await asyncio.gather(*pending)

            async with container() as request_container:
                post_repo = await request_container.get(PostRepository)
                vote_repo = await request_container.get(VoteRepository)
                stored = await post_repo.find_by_id(post.id)
                ledger_up = await vote_repo.count_by_post(post.id, VoteType.UP)

            assert result.drifted
            assert ledger_up == 1
            assert stored.upvotes == ledger_up
            assert stored.comment_count == 0
        finally:
            await container.close()
