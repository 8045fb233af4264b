"""Google OpenID Connect client implementation.

Implements the authorization code flow with PKCE against Google's OIDC
endpoints.
"""

from datetime import timedelta
from typing import Any
from urllib.parse import urlencode

import httpx
import jwt
import logfire

from chatauth.adapter.error import ProviderAuthError
from chatauth.adapter.pkce import generate_pkce_pair
from chatauth.domain.repository import AuthorizationStateStore
from chatauth.domain.service.auth_service import OAuthClient
from chatauth.domain.value import AuthenticatedPrincipal, AuthProvider, OidcPrincipal

GOOGLE_ISSUERS = ("https://accounts.google.com", "accounts.google.com")


def verifier_key(state: str) -> str:
    """Store key for the PKCE verifier of a pending login."""
    return f"google:{state}"


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OIDC client with PKCE support."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: list[str],
        state_store: AuthorizationStateStore,
        state_ttl: timedelta,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
            scopes: Requested scopes (must include openid)
            state_store: Shared store for PKCE verifiers of pending logins
            state_ttl: How long a pending login stays valid
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes
        self.state_store = state_store
        self.state_ttl = state_ttl

        self.authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
        self.token_url = "https://oauth2.googleapis.com/token"
        self.userinfo_url = "https://openidconnect.googleapis.com/v1/userinfo"

    async def initiate_authorization(self, state: str) -> str:
        """Build the Google authorization URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        code_verifier, code_challenge = generate_pkce_pair()
        await self.state_store.put(verifier_key(state), code_verifier, self.state_ttl)

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(self.scopes),
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            "access_type": "online",
        }

        logfire.info("Google authorization initiated", redirect_uri=self.redirect_uri)
        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(
        self, code: str, state: str
    ) -> AuthenticatedPrincipal:
        """Exchange the code and load the user's claims.

        Args:
            code: Authorization code from Google callback
            state: State parameter for verification

        Returns:
            OIDC principal with ID-token and userinfo claims

        Raises:
            ProviderAuthError: If any step of the exchange fails
        """
        code_verifier = await self.state_store.take(verifier_key(state))
        if not code_verifier:
            raise ProviderAuthError("google", "unknown state or PKCE verifier")

        tokens = await self._exchange_code_for_tokens(code, code_verifier)
        id_claims = self._decode_id_token(tokens.get("id_token"))
        userinfo = await self._get_userinfo(tokens["access_token"])

        logfire.info("Google OAuth completed", sub=id_claims.get("sub"))

        return OidcPrincipal(
            provider=AuthProvider.GOOGLE,
            attributes={**id_claims, **userinfo},
            id_token_claims=id_claims,
            userinfo_claims=userinfo,
        )

    async def _exchange_code_for_tokens(
        self, code: str, code_verifier: str
    ) -> dict[str, Any]:
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "code_verifier": code_verifier,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.token_url, data=data, timeout=30.0)
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise ProviderAuthError("google", f"HTTP error during token exchange: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderAuthError(
                "google", f"token exchange failed: {response.status_code}"
            )

        result = response.json()
        if "access_token" not in result:
            raise ProviderAuthError("google", "token response without access_token")
        return result

    def _decode_id_token(self, id_token: str | None) -> dict[str, Any]:
        """Decode the ID token received directly from the token endpoint.

        The token came over TLS from Google itself, so the signature is not
        re-verified; expiry, audience and issuer still are.
        """
        if not id_token:
            raise ProviderAuthError("google", "token response without id_token")
        try:
            claims = jwt.decode(
                id_token, options={"verify_signature": False, "verify_exp": True}
            )
        except jwt.InvalidTokenError as e:
            raise ProviderAuthError("google", f"rejected id_token: {e}")

        audience = claims.get("aud")
        audiences = audience if isinstance(audience, list) else [audience]
        if self.client_id not in audiences:
            raise ProviderAuthError("google", "id_token audience mismatch")
        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise ProviderAuthError("google", "id_token issuer mismatch")
        return claims

    async def _get_userinfo(self, access_token: str) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Google userinfo HTTP error", error=str(e))
            raise ProviderAuthError("google", f"HTTP error fetching userinfo: {e}")

        if response.status_code != 200:
            logfire.error(
                "Google userinfo request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderAuthError(
                "google", f"userinfo request failed: {response.status_code}"
            )
        return response.json()


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Returns deterministic test data without making real API calls. Tests
    may override `claims` to simulate other accounts.
    """

    def __init__(self, claims: dict[str, Any] | None = None):
        """Initialize mock client without real OAuth configuration."""
        self.claims = claims or {
            "sub": "g123",
            "email": "a@x.com",
            "email_verified": True,
            "name": "Ann Lee",
            "picture": "https://example.com/ann.png",
        }

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def complete_authorization(
        self, code: str, state: str
    ) -> AuthenticatedPrincipal:
        """Return a principal built from the configured claims."""
        id_claims = {
            "iss": "https://accounts.google.com",
            "sub": self.claims.get("sub"),
            "email": self.claims.get("email"),
        }
        return OidcPrincipal(
            provider=AuthProvider.GOOGLE,
            attributes=dict(self.claims),
            id_token_claims=id_claims,
            userinfo_claims=dict(self.claims),
        )
