"""In-memory repository implementations for testing."""

from .authorization_state import InMemoryAuthorizationStateStore
from .handoff import InMemoryHandoffStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuthorizationStateStore",
    "InMemoryHandoffStore",
    "InMemoryUserRepository",
]
