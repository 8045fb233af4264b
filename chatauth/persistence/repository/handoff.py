"""Redis implementation of the handoff store."""

from datetime import timedelta
from typing import Optional

from redis.asyncio import Redis

from chatauth.domain.repository import HandoffStore
from chatauth.domain.value import HandoffPayload, HandoffToken


class RedisHandoffStore(HandoffStore):
    """Handoff entries as JSON strings under `{prefix}:{token}`.

    Expiry is delegated to Redis key TTLs and `take` uses GETDEL, so
    concurrent exchanges of one token see the payload at most once.
    """

    def __init__(self, client: Redis, prefix: str) -> None:
        """Initialize store.

        Args:
            client: Async Redis client (decoded responses)
            prefix: Key namespace
        """
        self.client = client
        self.prefix = prefix

    def _key(self, token: HandoffToken) -> str:
        return f"{self.prefix}:{token}"

    async def put(
        self, token: HandoffToken, payload: HandoffPayload, ttl: timedelta
    ) -> None:
        """Store a payload with a TTL."""
        await self.client.set(
            self._key(token),
            payload.model_dump_json(),
            ex=int(ttl.total_seconds()),
        )

    async def get(self, token: HandoffToken) -> Optional[HandoffPayload]:
        """Read a live entry without consuming it."""
        data = await self.client.get(self._key(token))
        return HandoffPayload.model_validate_json(data) if data else None

    async def delete(self, token: HandoffToken) -> None:
        """Remove an entry if present."""
        await self.client.delete(self._key(token))

    async def take(self, token: HandoffToken) -> Optional[HandoffPayload]:
        """Atomically read and delete an entry."""
        data = await self.client.getdel(self._key(token))
        return HandoffPayload.model_validate_json(data) if data else None
