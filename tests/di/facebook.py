"""Mock Facebook providers for testing."""

from dishka import Scope, provide

from chatauth.adapter.facebook.client import (
    FacebookOAuthClient,
    MockFacebookOAuthClient,
)
from chatauth.util.di.infrastructure.facebook import FacebookProvider


class MockFacebookProvider(FacebookProvider):
    """Mock Facebook provider using mock OAuth client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_facebook_oauth_client(self) -> FacebookOAuthClient:
        """Provide mock Facebook OAuth client."""
        return MockFacebookOAuthClient()
