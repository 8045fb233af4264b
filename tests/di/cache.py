"""Mock cache providers for testing."""

from dishka import Scope, provide

from chatauth.domain.repository import AuthorizationStateStore, HandoffStore
from chatauth.persistence.repository.inmemory import (
    InMemoryAuthorizationStateStore,
    InMemoryHandoffStore,
)
from chatauth.util.di.infrastructure.cache import CacheProvider


class MockCacheProvider(CacheProvider):
    """Mock cache provider using in-memory stores."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_handoff_store(self) -> HandoffStore:
        """Provide in-memory handoff store."""
        return InMemoryHandoffStore()

    @provide(scope=Scope.APP)
    def get_authorization_state_store(self) -> AuthorizationStateStore:
        """Provide in-memory pending-login store."""
        return InMemoryAuthorizationStateStore()
