"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide

from chatauth.adapter.facebook.client import FacebookOAuthClient
from chatauth.adapter.google.client import GoogleOAuthClient
from chatauth.domain.service.auth_service import OAuthClient
from chatauth.domain.value import AuthProvider
from chatauth.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        google_oauth_client: GoogleOAuthClient,
        facebook_oauth_client: FacebookOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        Args:
            google_oauth_client: Google OIDC client (specific type)
            facebook_oauth_client: Facebook OAuth client (specific type)

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return {
            AuthProvider.GOOGLE: google_oauth_client,
            AuthProvider.FACEBOOK: facebook_oauth_client,
        }
