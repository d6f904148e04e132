"""Health check route."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from agriforum.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str
    environment: str
    git_sha: str
    checked_at: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        git_sha=settings.git_sha,
        checked_at=datetime.now(timezone.utc),
    )
