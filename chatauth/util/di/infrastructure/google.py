"""Google infrastructure providers."""

from datetime import timedelta

from dishka import Scope, provide

from chatauth.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from chatauth.config import AuthSettings
from chatauth.domain.repository import AuthorizationStateStore
from chatauth.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(
        self, auth_settings: AuthSettings, state_store: AuthorizationStateStore
    ) -> GoogleOAuthClient:
        """Provide Google OIDC client.

        Raises:
            ValueError: If Google OAuth credentials are not configured
        """
        google = auth_settings.google
        if not google.client_id:
            raise ValueError("Google OAuth client ID must be configured")
        if not google.client_secret:
            raise ValueError("Google OAuth client secret must be configured")

        return RealGoogleOAuthClient(
            client_id=google.client_id,
            client_secret=google.client_secret,
            redirect_uri=auth_settings.google_callback_url,
            scopes=google.scopes,
            state_store=state_store,
            state_ttl=timedelta(seconds=auth_settings.authorization_state_ttl_seconds),
        )
