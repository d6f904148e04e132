"""Application layer DI providers."""

from dishka import Scope, provide

from agriforum.application.usecase.comment import (
    AddCommentUseCase,
    GetCommentsUseCase,
)
from agriforum.application.usecase.engagement import ReconcileCountersUseCase
from agriforum.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from agriforum.application.usecase.vote import CastVoteUseCase
from agriforum.domain.service import (
    CommentService,
    EngagementService,
    PostService,
    VoteService,
)
from agriforum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, vote_service=vote_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self, comment_service: CommentService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    # Maintenance use cases
    @provide(scope=Scope.REQUEST)
    def get_reconcile_counters_use_case(
        self, engagement_service: EngagementService
    ) -> ReconcileCountersUseCase:
        """Provide counter reconciliation use case."""
        return ReconcileCountersUseCase(engagement_service=engagement_service)
