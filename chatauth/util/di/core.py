"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from chatauth.config import AuthSettings, RedisSettings, Settings
from chatauth.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Sections are provided separately so services depend only on what they use.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings (JWT secret, lifetimes, provider credentials)."""
        return settings.auth

    @provide
    def provide_redis_settings(self, settings: Settings) -> RedisSettings:
        """Provide Redis settings for the handoff store."""
        return settings.redis
