"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from agriforum.config import AuthSettings, EngagementSettings, Settings
from agriforum.util.di.base import ProviderBase
from agriforum.util.error import ConfigurationError

DEFAULT_JWT_SECRET = AuthSettings().jwt_secret


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings.

        Raises:
            ConfigurationError: If production still uses the default secret
        """
        if (
            settings.environment == "production"
            and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_engagement_settings(self, settings: Settings) -> EngagementSettings:
        """Provide vote/comment write-path settings."""
        return settings.engagement
