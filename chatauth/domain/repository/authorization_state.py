"""Pending OAuth authorization state store interface."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional


class AuthorizationStateStore(ABC):
    """Short-lived store for logins started but not yet completed.

    Holds what a provider client must remember between redirecting the
    user and handling the callback (e.g. the PKCE verifier), keyed by the
    OAuth `state` parameter. Shared across workers, so the callback may
    land on any of them.
    """

    @abstractmethod
    async def put(self, key: str, value: str, ttl: timedelta) -> None:
        """Remember a value until it is taken or the TTL passes.

        Args:
            key: Provider-namespaced state key
            value: Value to hand back on callback
            ttl: Time to live
        """
        pass

    @abstractmethod
    async def take(self, key: str) -> Optional[str]:
        """Atomically read and delete a value.

        Args:
            key: Provider-namespaced state key

        Returns:
            The value if it was live, None otherwise
        """
        pass
