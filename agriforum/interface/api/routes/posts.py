"""Post routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from agriforum.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from agriforum.domain.error import DomainError
from agriforum.domain.repository.post import PostSortOrder
from agriforum.domain.service import JWTService
from agriforum.domain.value import PostCategory
from agriforum.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1, max_length=10000)
    category: PostCategory = PostCategory.GENERAL


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreatePostResponse:
    """Ask a new question in the forum.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post details

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                title=request.title,
                content=request.content,
                category=request.category,
                author_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    jwt_service: FromDishka[JWTService],
    sort: PostSortOrder = Query(default=PostSortOrder.NEWEST),
    category: Optional[PostCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=200),
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListPostsResponse:
    """List posts, newest or most voted first.

    Authentication is optional; when present each post includes the
    caller's vote state.

    Args:
        list_posts_use_case: List posts use case from DI
        jwt_service: JWT service for token verification (injected)
        sort: Sort order (newest or most_voted)
        category: Filter by category
        search: Search text matched against title and content
        limit: Maximum number of posts to return
        offset: Number of posts to skip
        auth_token: JWT token from cookie

    Returns:
        Page of posts with total count
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                sort=sort,
                category=category,
                search=search,
                limit=limit,
                offset=offset,
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a single post.

    Args:
        post_id: Post UUID
        get_post_use_case: Get post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Post details with the caller's vote state

    Raises:
        HTTPException: If post not found
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id),
                user_id=str(user_id) if user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
