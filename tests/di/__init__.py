"""Mock providers for testing."""

from .cache import MockCacheProvider
from .facebook import MockFacebookProvider
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockCacheProvider",
    "MockFacebookProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
