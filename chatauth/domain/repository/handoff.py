"""State-token handoff store interface."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

from chatauth.domain.value import HandoffPayload, HandoffToken


class HandoffStore(ABC):
    """Short-lived key/value store for one-time login handoffs.

    Entries expire after their TTL; expired entries read as absent.
    """

    @abstractmethod
    async def put(
        self, token: HandoffToken, payload: HandoffPayload, ttl: timedelta
    ) -> None:
        """Store a payload under a handoff token, overwriting any entry.

        Args:
            token: Handoff token
            payload: Tokens and identity fields to hand off
            ttl: Time to live
        """
        pass

    @abstractmethod
    async def get(self, token: HandoffToken) -> Optional[HandoffPayload]:
        """Read a live entry without consuming it.

        Args:
            token: Handoff token

        Returns:
            The payload if present and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def delete(self, token: HandoffToken) -> None:
        """Remove an entry if present.

        Args:
            token: Handoff token
        """
        pass

    @abstractmethod
    async def take(self, token: HandoffToken) -> Optional[HandoffPayload]:
        """Atomically read and delete an entry.

        Of any number of concurrent takes for the same token, at most one
        returns the payload.

        Args:
            token: Handoff token

        Returns:
            The payload if it was live, None otherwise
        """
        pass
