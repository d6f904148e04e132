"""Vote routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from agriforum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from agriforum.domain.error import DomainError
from agriforum.domain.service import JWTService
from agriforum.domain.value import VoteType
from agriforum.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for voting on a post."""

    vote_type: VoteType


@router.post("/posts/{post_id}/vote", response_model=CastVoteResponse)
async def vote_on_post(
    post_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote a post up or down.

    Sending the vote the caller already holds removes it; sending the
    opposite vote switches it. Requires authentication.

    Args:
        post_id: Post UUID
        request: Requested vote ("up" or "down")
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The caller's new vote state and the post's counters

    Raises:
        HTTPException: 401 if not authenticated, 404 if the post is gone,
            409 if concurrent votes kept conflicting, 503 if storage is down
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                post_id=str(post_id),
                user_id=str(user_id) if user_id else None,
                vote_type=request.vote_type,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
