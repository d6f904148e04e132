"""Domain layer DI providers."""

from dishka import Scope, provide

from agriforum.config import AuthSettings, EngagementSettings
from agriforum.domain.repository import (
    CommentRepository,
    PostRepository,
    UnitOfWork,
    VoteRepository,
)
from agriforum.domain.service import (
    CommentService,
    EngagementService,
    JWTService,
    PostService,
    VoteService,
)
from agriforum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_service: PostService,
        unit_of_work: UnitOfWork,
        engagement_settings: EngagementSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_service=post_service,
            unit_of_work=unit_of_work,
            engagement_settings=engagement_settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_service: PostService,
        unit_of_work: UnitOfWork,
        engagement_settings: EngagementSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_service=post_service,
            unit_of_work=unit_of_work,
            engagement_settings=engagement_settings,
        )

    @provide
    def get_engagement_service(
        self,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        unit_of_work: UnitOfWork,
    ) -> EngagementService:
        """Provide counter reconciliation service."""
        return EngagementService(
            post_repository=post_repository,
            vote_repository=vote_repository,
            comment_repository=comment_repository,
            unit_of_work=unit_of_work,
        )
