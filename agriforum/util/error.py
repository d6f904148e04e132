"""Utility layer errors.

Raised while wiring the application (settings, engine, DI container),
never from request handling.
"""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings that cannot work, e.g. a sync database driver."""

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass
