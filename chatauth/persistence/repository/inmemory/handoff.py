"""In-memory handoff store for testing."""

from datetime import datetime, timedelta
from typing import Optional

from chatauth.domain.repository.handoff import HandoffStore
from chatauth.domain.service.base import Clock, utc_now
from chatauth.domain.value import HandoffPayload, HandoffToken


class InMemoryHandoffStore(HandoffStore):
    """In-memory implementation of HandoffStore for testing.

    No await happens between the read and the delete in `take`, so it is
    atomic on a single event loop.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock
        self._entries: dict[HandoffToken, tuple[HandoffPayload, datetime]] = {}

    def _live(self, token: HandoffToken) -> Optional[HandoffPayload]:
        entry = self._entries.get(token)
        if entry is None:
            return None
        payload, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[token]
            return None
        return payload

    def _purge_expired(self) -> None:
        now = self.clock()
        expired = [t for t, (_, exp) in self._entries.items() if now >= exp]
        for token in expired:
            del self._entries[token]

    async def put(
        self, token: HandoffToken, payload: HandoffPayload, ttl: timedelta
    ) -> None:
        """Store a payload with a TTL."""
        self._purge_expired()
        self._entries[token] = (payload, self.clock() + ttl)

    async def get(self, token: HandoffToken) -> Optional[HandoffPayload]:
        """Read a live entry without consuming it."""
        return self._live(token)

    async def delete(self, token: HandoffToken) -> None:
        """Remove an entry if present."""
        self._entries.pop(token, None)

    async def take(self, token: HandoffToken) -> Optional[HandoffPayload]:
        """Atomically read and delete an entry."""
        payload = self._live(token)
        if payload is not None:
            del self._entries[token]
        return payload

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)
