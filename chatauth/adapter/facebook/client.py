"""Facebook OAuth 2.0 client implementation."""

from datetime import timedelta
from typing import Any
from urllib.parse import urlencode

import httpx
import logfire

from chatauth.adapter.error import ProviderAuthError
from chatauth.domain.repository import AuthorizationStateStore
from chatauth.domain.service.auth_service import OAuthClient
from chatauth.domain.value import AuthenticatedPrincipal, AuthProvider, OAuth2Principal

USER_FIELDS = "id,name,email,picture"


def pending_state_key(state: str) -> str:
    """Store key marking a Facebook login as started."""
    return f"facebook:{state}"


class FacebookOAuthClient(OAuthClient):
    """Base class for Facebook OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealFacebookOAuthClient(FacebookOAuthClient):
    """Facebook OAuth 2.0 client using the Graph API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: list[str],
        graph_api_version: str,
        state_store: AuthorizationStateStore,
        state_ttl: timedelta,
    ) -> None:
        """Initialize Facebook OAuth client.

        Args:
            client_id: Facebook app ID
            client_secret: Facebook app secret
            redirect_uri: Callback URL registered with Facebook
            scopes: Requested permissions
            graph_api_version: Graph API version, e.g. "v19.0"
            state_store: Shared store for states of pending logins
            state_ttl: How long a pending login stays valid
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes
        self.state_store = state_store
        self.state_ttl = state_ttl

        self.authorize_url = f"https://www.facebook.com/{graph_api_version}/dialog/oauth"
        self.token_url = (
            f"https://graph.facebook.com/{graph_api_version}/oauth/access_token"
        )
        self.user_info_url = f"https://graph.facebook.com/{graph_api_version}/me"

    async def initiate_authorization(self, state: str) -> str:
        """Build the Facebook login dialog URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        await self.state_store.put(
            pending_state_key(state), self.redirect_uri, self.state_ttl
        )

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": ",".join(self.scopes),
            "state": state,
        }

        logfire.info(
            "Facebook authorization initiated", redirect_uri=self.redirect_uri
        )
        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(
        self, code: str, state: str
    ) -> AuthenticatedPrincipal:
        """Exchange the code and load the user's profile.

        Args:
            code: Authorization code from Facebook callback
            state: State parameter for verification

        Returns:
            OAuth2 principal with the Graph API user attributes

        Raises:
            ProviderAuthError: If any step of the exchange fails
        """
        if await self.state_store.take(pending_state_key(state)) is None:
            raise ProviderAuthError("facebook", "unknown state")

        access_token = await self._exchange_code_for_token(code)
        user_info = await self._get_user_info(access_token)

        logfire.info("Facebook OAuth completed", facebook_id=user_info.get("id"))

        return OAuth2Principal(provider=AuthProvider.FACEBOOK, attributes=user_info)

    async def _exchange_code_for_token(self, code: str) -> str:
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "code": code,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.token_url, data=data, timeout=30.0)
        except httpx.HTTPError as e:
            logfire.error("Facebook token exchange HTTP error", error=str(e))
            raise ProviderAuthError(
                "facebook", f"HTTP error during token exchange: {e}"
            )

        if response.status_code != 200:
            logfire.error(
                "Facebook token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderAuthError(
                "facebook", f"token exchange failed: {response.status_code}"
            )

        result = response.json()
        if "access_token" not in result:
            raise ProviderAuthError("facebook", "token response without access_token")
        return result["access_token"]

    async def _get_user_info(self, access_token: str) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.user_info_url,
                    params={"fields": USER_FIELDS},
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Facebook user info HTTP error", error=str(e))
            raise ProviderAuthError("facebook", f"HTTP error fetching user info: {e}")

        if response.status_code != 200:
            logfire.error(
                "Facebook user info request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderAuthError(
                "facebook", f"user info request failed: {response.status_code}"
            )
        return response.json()


class MockFacebookOAuthClient(FacebookOAuthClient):
    """Mock Facebook OAuth client for testing.

    Returns deterministic test data without making real API calls. Tests
    may override `attributes` to simulate other accounts.
    """

    def __init__(self, attributes: dict[str, Any] | None = None):
        """Initialize mock client without real OAuth configuration."""
        self.attributes = attributes or {
            "id": "fb456",
            "name": "Ann Lee",
            "email": "a@x.com",
            "picture": {"data": {"url": "https://example.com/ann-fb.png"}},
        }

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://www.facebook.com/dialog/oauth?state={state}&mock=true"

    async def complete_authorization(
        self, code: str, state: str
    ) -> AuthenticatedPrincipal:
        """Return a principal built from the configured attributes."""
        return OAuth2Principal(
            provider=AuthProvider.FACEBOOK, attributes=dict(self.attributes)
        )
