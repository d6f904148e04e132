"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from agriforum.application.usecase.comment import (
    AddCommentRequest,
    AddCommentResponse,
    AddCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from agriforum.domain.error import DomainError
from agriforum.domain.service import JWTService
from agriforum.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class AddCommentAPIRequest(BaseModel):
    """API request for replying to a post."""

    content: str


@router.post(
    "/posts/{post_id}/comments",
    response_model=AddCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: UUID,
    request: AddCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AddCommentResponse:
    """Reply to a post.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment content
        add_comment_use_case: Add comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The stored comment and the post's new comment count

    Raises:
        HTTPException: 401 if not authenticated, 400 if the content is
            empty, 404 if the post is gone, 503 if storage is down
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await add_comment_use_case.execute(
            AddCommentRequest(
                post_id=str(post_id),
                content=request.content,
                author_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> GetCommentsResponse:
    """List a post's comments, oldest first.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI
        limit: Maximum number of comments
        offset: Number of comments to skip

    Returns:
        Comments in creation order

    Raises:
        HTTPException: If post not found
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(post_id=str(post_id), limit=limit, offset=offset)
        )
    except DomainError as e:
        raise to_http_exception(e)
