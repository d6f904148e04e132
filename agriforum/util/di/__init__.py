"""Dependency injection module.

Providers are listed once in PROVIDERS. A provider with subclasses is a
mockable component: its subclasses are the production and mock variants,
told apart by ``__is_mock__``. The production container and the test
container both resolve variants through ``get_provider``.
"""

from typing import Type

from agriforum.util.di.application import ProdApplicationProvider
from agriforum.util.di.base import Component, ProviderBase
from agriforum.util.di.core import ProdConfigProvider
from agriforum.util.di.domain import ProdDomainProvider
from agriforum.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from agriforum.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def is_mockable(base: Type[ProviderBase]) -> bool:
    """Whether ``base`` is a component with production and mock variants."""
    return bool(base.__subclasses__())


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    Args:
        base: Entry from PROVIDERS
        use_mock: Select the mock variant of a mockable component

    Returns:
        ``base`` itself for concrete providers, otherwise the matching variant

    Raises:
        DependencyInjectionError: If the requested variant is not defined
            (mock variants live under tests/di and must be imported first)
    """
    if not is_mockable(base):
        return base

    for variant in base.__subclasses__():
        if variant.__is_mock__ == use_mock:
            return variant

    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
    "is_mockable",
]
