"""Counter reconciliation service."""

from dataclasses import dataclass

import logfire

from agriforum.domain.error import NotFoundError
from agriforum.domain.repository import (
    CommentRepository,
    PostRepository,
    UnitOfWork,
    VoteRepository,
)
from agriforum.domain.value import EngagementCounts, PostId, VoteType

from .base import Service
from .retry import translate_storage_errors


@dataclass
class ReconciliationResult:
    """Counters of one post before and after reconciliation."""

    post_id: PostId
    before: EngagementCounts
    after: EngagementCounts

    @property
    def drifted(self) -> bool:
        return self.before != self.after


class EngagementService(Service):
    """Recomputes cached post counters from the vote ledger and comments.

    The normal write paths keep counters in sync on their own. This service
    repairs drift left by out-of-band edits, e.g. rows changed by hand in the
    database console.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        unit_of_work: UnitOfWork,
    ) -> None:
        self.post_repository = post_repository
        self.vote_repository = vote_repository
        self.comment_repository = comment_repository
        self.unit_of_work = unit_of_work

    async def recompute_counts(self, post_id: PostId) -> EngagementCounts:
        """Aggregate the source tables for one post."""
        return EngagementCounts(
            upvotes=await self.vote_repository.count_by_post(post_id, VoteType.UP),
            downvotes=await self.vote_repository.count_by_post(
                post_id, VoteType.DOWN
            ),
            comment_count=await self.comment_repository.count_by_post(post_id),
        )

    async def reconcile_post(self, post_id: PostId) -> ReconciliationResult:
        """Overwrite a post's counters with values recomputed from source.

        Args:
            post_id: Post ID

        Returns:
            Counters before and after the repair

        Raises:
            NotFoundError: If the post does not exist
            StorageUnavailableError: If the store could not be reached
        """
        with logfire.span("engagement_service.reconcile_post", post_id=str(post_id)):
            with translate_storage_errors("reconcile_post", post_id):
                async with self.unit_of_work.transaction():
                    # Lock first so no vote lands between counting and overwriting
                    post = await self.post_repository.find_by_id_for_update(post_id)
                    if post is None:
                        raise NotFoundError("Post", str(post_id))

                    before = post.counts
                    after = await self.recompute_counts(post_id)
                    if before != after:
                        await self.post_repository.overwrite_counts(post_id, after)

            result = ReconciliationResult(post_id=post_id, before=before, after=after)
            if result.drifted:
                logfire.warn(
                    "Counter drift repaired",
                    post_id=str(post_id),
                    before=before.model_dump(),
                    after=after.model_dump(),
                )
            return result

    async def reconcile_all(self) -> list[ReconciliationResult]:
        """Reconcile every post, one unit of work per post.

        Returns:
            Results for posts whose counters had drifted
        """
        with logfire.span("engagement_service.reconcile_all"):
            post_ids = await self.post_repository.list_ids()
            drifted: list[ReconciliationResult] = []
            for post_id in post_ids:
                try:
                    result = await self.reconcile_post(post_id)
                except NotFoundError:
                    # Deleted between listing and reconciling
                    continue
                if result.drifted:
                    drifted.append(result)

            logfire.info(
                "Reconciliation finished",
                checked=len(post_ids),
                drifted=len(drifted),
            )
            return drifted
