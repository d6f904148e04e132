"""Provider base class."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests can swap for in-memory variants
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Base for every provider in PROVIDERS.

    Attributes:
        __mock_component__: Name of the swappable component this provider
            implements, None for providers that are never mocked
        __is_mock__: True on the test variant of a component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
