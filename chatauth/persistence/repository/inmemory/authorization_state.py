"""In-memory authorization state store for testing."""

from datetime import datetime, timedelta
from typing import Optional

from chatauth.domain.repository.authorization_state import AuthorizationStateStore
from chatauth.domain.service.base import Clock, utc_now


class InMemoryAuthorizationStateStore(AuthorizationStateStore):
    """In-memory implementation of AuthorizationStateStore for testing."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock
        self._entries: dict[str, tuple[str, datetime]] = {}

    async def put(self, key: str, value: str, ttl: timedelta) -> None:
        """Store a value with a TTL."""
        now = self.clock()
        self._entries = {k: e for k, e in self._entries.items() if now < e[1]}
        self._entries[key] = (value, now + ttl)

    async def take(self, key: str) -> Optional[str]:
        """Atomically read and delete a value."""
        entry = self._entries.pop(key, None)
        if entry is None or self.clock() >= entry[1]:
            return None
        return entry[0]

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self.clock() < entry[1]
