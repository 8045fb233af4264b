"""Unit tests for the Google OIDC client (no network)."""

import time
from datetime import timedelta
from urllib.parse import parse_qs, urlparse

import jwt
import pytest

from chatauth.adapter.error import ProviderAuthError
from chatauth.adapter.google.client import (
    MockGoogleOAuthClient,
    RealGoogleOAuthClient,
    verifier_key,
)
from chatauth.domain.value import AuthProvider, OidcPrincipal
from chatauth.persistence.repository.inmemory import InMemoryAuthorizationStateStore


@pytest.fixture
def state_store(clock) -> InMemoryAuthorizationStateStore:
    return InMemoryAuthorizationStateStore(clock=clock)


@pytest.fixture
def client(state_store) -> RealGoogleOAuthClient:
    return RealGoogleOAuthClient(
        client_id="client-123",
        client_secret="secret",
        redirect_uri="http://localhost:8000/login/oauth2/code/google",
        scopes=["openid", "email", "profile"],
        state_store=state_store,
        state_ttl=timedelta(minutes=10),
    )


def id_token(**claims) -> str:
    defaults = {
        "iss": "https://accounts.google.com",
        "aud": "client-123",
        "sub": "g123",
    }
    return jwt.encode(
        {**defaults, **claims},
        "unused-signing-key-for-unverified-decode",
        algorithm="HS256",
    )


class TestInitiateAuthorization:
    @pytest.mark.asyncio
    async def test_url_carries_state_and_pkce_challenge(self, client, state_store):
        url = await client.initiate_authorization("state-1")

        query = parse_qs(urlparse(url).query)
        assert url.startswith("https://accounts.google.com/o/oauth2/v2/auth?")
        assert query["state"] == ["state-1"]
        assert query["client_id"] == ["client-123"]
        assert query["scope"] == ["openid email profile"]
        assert query["code_challenge_method"] == ["S256"]
        assert verifier_key("state-1") in state_store


class TestCompleteAuthorization:
    @pytest.mark.asyncio
    async def test_unknown_state_is_rejected(self, client):
        with pytest.raises(ProviderAuthError):
            await client.complete_authorization("code", "never-issued")

    @pytest.mark.asyncio
    async def test_pending_login_expires(self, client, clock):
        await client.initiate_authorization("state-1")
        clock.advance(11 * 60)

        with pytest.raises(ProviderAuthError):
            await client.complete_authorization("code", "state-1")

    @pytest.mark.asyncio
    async def test_callback_may_reach_another_instance(
        self, client, state_store, monkeypatch
    ):
        """Verifiers live in the shared store, not in the client instance."""
        await client.initiate_authorization("state-1")
        other = RealGoogleOAuthClient(
            client_id="client-123",
            client_secret="secret",
            redirect_uri="http://localhost:8000/login/oauth2/code/google",
            scopes=["openid"],
            state_store=state_store,
            state_ttl=timedelta(minutes=10),
        )
        seen = {}

        async def fake_exchange(code, code_verifier):
            seen["verifier"] = code_verifier
            return {"access_token": "provider-access", "id_token": id_token()}

        async def fake_userinfo(access_token):
            return {"sub": "g123", "email": "a@x.com"}

        monkeypatch.setattr(other, "_exchange_code_for_tokens", fake_exchange)
        monkeypatch.setattr(other, "_get_userinfo", fake_userinfo)

        principal = await other.complete_authorization("code", "state-1")

        assert principal.id_token_claims["sub"] == "g123"
        assert len(seen["verifier"]) >= 43

    @pytest.mark.asyncio
    async def test_builds_oidc_principal(self, client, state_store, monkeypatch):
        await client.initiate_authorization("state-1")

        async def fake_exchange(code, code_verifier):
            return {
                "access_token": "provider-access",
                "id_token": id_token(email="a@x.com"),
            }

        async def fake_userinfo(access_token):
            return {"sub": "g123", "email": "a@x.com", "name": "Ann Lee"}

        monkeypatch.setattr(client, "_exchange_code_for_tokens", fake_exchange)
        monkeypatch.setattr(client, "_get_userinfo", fake_userinfo)

        principal = await client.complete_authorization("code", "state-1")

        assert isinstance(principal, OidcPrincipal)
        assert principal.provider == AuthProvider.GOOGLE
        assert principal.id_token_claims["sub"] == "g123"
        assert principal.userinfo_claims["name"] == "Ann Lee"
        assert principal.attributes["email"] == "a@x.com"
        # Verifier is single use
        assert verifier_key("state-1") not in state_store


class TestDecodeIdToken:
    def test_accepts_matching_audience_and_issuer(self, client):
        claims = client._decode_id_token(id_token())

        assert claims["sub"] == "g123"

    def test_rejects_wrong_audience(self, client):
        with pytest.raises(ProviderAuthError):
            client._decode_id_token(id_token(aud="someone-else"))

    def test_rejects_wrong_issuer(self, client):
        with pytest.raises(ProviderAuthError):
            client._decode_id_token(id_token(iss="https://evil.example"))

    def test_rejects_expired_token(self, client):
        with pytest.raises(ProviderAuthError):
            client._decode_id_token(id_token(exp=int(time.time()) - 60))

    def test_accepts_unexpired_token(self, client):
        claims = client._decode_id_token(id_token(exp=int(time.time()) + 3600))

        assert claims["sub"] == "g123"

    def test_rejects_missing_token(self, client):
        with pytest.raises(ProviderAuthError):
            client._decode_id_token(None)


@pytest.mark.asyncio
async def test_mock_client_returns_configured_claims():
    mock = MockGoogleOAuthClient(claims={"sub": "g999", "email": "z@x.com"})

    principal = await mock.complete_authorization("code", "state")

    assert principal.attributes["sub"] == "g999"
    assert principal.id_token_claims["email"] == "z@x.com"
