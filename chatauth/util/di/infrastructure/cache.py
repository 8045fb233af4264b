"""Cache infrastructure providers (handoff and pending-login stores)."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from redis.asyncio import Redis

from chatauth.config import RedisSettings
from chatauth.domain.repository import AuthorizationStateStore, HandoffStore
from chatauth.persistence.cache import create_redis_client
from chatauth.persistence.repository import (
    RedisAuthorizationStateStore,
    RedisHandoffStore,
)
from chatauth.util.di.base import ProviderBase
from chatauth.util.observability import instrument_redis


class CacheProvider(ProviderBase):
    """Cache component base."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider using Redis."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_redis_client(self, settings: RedisSettings) -> AsyncIterator[Redis]:
        """Provide Redis client, closed on container close."""
        instrument_redis()
        client = create_redis_client(settings)
        yield client
        await client.aclose()

    @provide
    def get_handoff_store(self, client: Redis, settings: RedisSettings) -> HandoffStore:
        """Provide Redis-backed handoff store."""
        return RedisHandoffStore(client=client, prefix=settings.state_token_prefix)

    @provide
    def get_authorization_state_store(
        self, client: Redis, settings: RedisSettings
    ) -> AuthorizationStateStore:
        """Provide Redis-backed store for pending provider logins."""
        return RedisAuthorizationStateStore(
            client=client, prefix=settings.authorization_state_prefix
        )
