"""FastAPI application factory."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agriforum.config import Settings
from agriforum.interface.api.routes import comments, health, posts, votes
from agriforum.util.di.container import create_container, setup_di
from agriforum.util.observability import instrument_fastapi

API_VERSION = "0.1.0"


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the forum API.

    Logfire must already be configured (``scripts/start_app.py`` does this).

    Args:
        container: DI container; tests pass one backed by in-memory
            persistence. Defaults to the production container.
    """
    settings = Settings()

    app = FastAPI(
        title="AgriForum API",
        description="Community forum for farmers: questions, votes and replies",
        version=API_VERSION,
    )
    instrument_fastapi(app)

    # The auth cookie is only sent cross-origin with credentials allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        expose_headers=["Retry-After"],
        max_age=600,
    )

    setup_di(app, container or create_container())

    for router in (health.router, posts.router, votes.router, comments.router):
        app.include_router(router)

    return app
