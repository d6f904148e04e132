"""Domain services."""

from .base import Service
from .comment_service import CommentOutcome, CommentService
from .engagement_service import EngagementService, ReconciliationResult
from .jwt_service import JWTService
from .post_service import PostService
from .retry import RetryPolicy, translate_storage_errors
from .vote_service import VoteOutcome, VoteService
from .vote_transition import compute_transition

__all__ = [
    "CommentOutcome",
    "CommentService",
    "EngagementService",
    "JWTService",
    "PostService",
    "ReconciliationResult",
    "RetryPolicy",
    "Service",
    "VoteOutcome",
    "VoteService",
    "compute_transition",
    "translate_storage_errors",
]
