"""Reconcile counters use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from agriforum.application.usecase.base import BaseUseCase
from agriforum.domain.service import EngagementService, ReconciliationResult
from agriforum.domain.value import EngagementCounts, PostId


class ReconcileCountersRequest(BaseModel):
    """Reconcile counters request."""

    post_id: Optional[str] = None  # Reconcile one post, or every post if None


class RepairedPost(BaseModel):
    """A post whose cached counters had drifted."""

    post_id: str
    before: EngagementCounts
    after: EngagementCounts


class ReconcileCountersResponse(BaseModel):
    """Reconcile counters response."""

    repaired: list[RepairedPost]


class ReconcileCountersUseCase(BaseUseCase):
    """Use case for recomputing post counters from the ledger and comments."""

    def __init__(self, engagement_service: EngagementService) -> None:
        self.engagement_service = engagement_service

    async def execute(
        self, request: ReconcileCountersRequest
    ) -> ReconcileCountersResponse:
        """Execute reconciliation.

        Raises:
            NotFoundError: If a single post was requested and does not exist
        """
        results: list[ReconciliationResult]
        if request.post_id:
            result = await self.engagement_service.reconcile_post(
                PostId(UUID(request.post_id))
            )
            results = [result] if result.drifted else []
        else:
            results = await self.engagement_service.reconcile_all()

        return ReconcileCountersResponse(
            repaired=[
                RepairedPost(post_id=str(r.post_id), before=r.before, after=r.after)
                for r in results
            ]
        )
