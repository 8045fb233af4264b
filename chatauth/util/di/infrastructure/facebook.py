"""Facebook infrastructure providers."""

from datetime import timedelta

from dishka import Scope, provide

from chatauth.adapter.facebook.client import (
    FacebookOAuthClient,
    RealFacebookOAuthClient,
)
from chatauth.config import AuthSettings
from chatauth.domain.repository import AuthorizationStateStore
from chatauth.util.di.base import ProviderBase


class FacebookProvider(ProviderBase):
    """Facebook component base."""

    __mock_component__ = "facebook"


class ProdFacebookProvider(FacebookProvider):
    """Production Facebook provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_facebook_oauth_client(
        self, auth_settings: AuthSettings, state_store: AuthorizationStateStore
    ) -> FacebookOAuthClient:
        """Provide Facebook OAuth client.

        Raises:
            ValueError: If Facebook OAuth credentials are not configured
        """
        facebook = auth_settings.facebook
        if not facebook.client_id:
            raise ValueError("Facebook OAuth client ID must be configured")
        if not facebook.client_secret:
            raise ValueError("Facebook OAuth client secret must be configured")

        return RealFacebookOAuthClient(
            client_id=facebook.client_id,
            client_secret=facebook.client_secret,
            redirect_uri=auth_settings.facebook_callback_url,
            scopes=facebook.scopes,
            graph_api_version=facebook.graph_api_version,
            state_store=state_store,
            state_ttl=timedelta(seconds=auth_settings.authorization_state_ttl_seconds),
        )
