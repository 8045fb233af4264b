"""Authentication domain service."""

import logfire

from chatauth.domain.error import UnsupportedProviderError
from chatauth.domain.value import AuthenticatedPrincipal, AuthProvider

from .base import Service


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(
        self, code: str, state: str
    ) -> AuthenticatedPrincipal:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Authenticated principal carrying the provider's user info
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider authentication operations.

    Coordinates authentication across the social login providers
    (Google, Facebook).
    """

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client_for(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise UnsupportedProviderError(provider.value)
        return client

    async def initiate_login(self, provider: AuthProvider, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider: Authentication provider to use
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        with logfire.span("auth_service.initiate_login", provider=provider.value):
            return await self._client_for(provider).initiate_authorization(state)

    async def complete_login(
        self, provider: AuthProvider, code: str, state: str
    ) -> AuthenticatedPrincipal:
        """Complete OAuth login flow for any provider.

        Args:
            provider: Authentication provider used
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Authenticated principal from the provider

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        with logfire.span("auth_service.complete_login", provider=provider.value):
            return await self._client_for(provider).complete_authorization(
                code, state
            )
