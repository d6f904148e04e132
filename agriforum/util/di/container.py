"""Production DI container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agriforum.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with every production provider.

    FastapiProvider makes the current Request resolvable inside handlers.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so DishkaRoute handlers can use it."""
    setup_dishka(container, app)
