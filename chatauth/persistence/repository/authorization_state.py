"""Redis implementation of the authorization state store."""

from datetime import timedelta
from typing import Optional

from redis.asyncio import Redis

from chatauth.domain.repository import AuthorizationStateStore


class RedisAuthorizationStateStore(AuthorizationStateStore):
    """Pending login state as plain strings under `{prefix}:{key}`."""

    def __init__(self, client: Redis, prefix: str) -> None:
        self.client = client
        self.prefix = prefix

    async def put(self, key: str, value: str, ttl: timedelta) -> None:
        """Store a value with a TTL."""
        await self.client.set(
            f"{self.prefix}:{key}", value, ex=int(ttl.total_seconds())
        )

    async def take(self, key: str) -> Optional[str]:
        """Atomically read and delete a value."""
        return await self.client.getdel(f"{self.prefix}:{key}")
