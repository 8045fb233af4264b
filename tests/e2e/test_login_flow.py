"""End-to-end tests for the social login flow."""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from chatauth.config import Settings
from chatauth.domain.service import TokenService
from chatauth.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client over a fully mocked container."""
    app = create_app(
        container=build_test_container(), settings=Settings(environment="test")
    )
    with TestClient(app) as test_client:
        yield test_client


def callback(client: TestClient, provider: str) -> str:
    response = client.get(
        f"/login/oauth2/code/{provider}",
        params={"code": "code-1", "state": "state-1"},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return response.headers["location"]


def state_of(location: str) -> str:
    return parse_qs(urlparse(location).query)["state"][0]


class TestGoogleLoginFlow:
    """Browser login through Google, then the frontend's token exchange."""

    def test_first_login_to_profile(self, client):
        settings = Settings()

        # Provider redirects back; we redirect to the frontend with a handoff token
        location = callback(client, "google")
        parsed = urlparse(location)
        assert location.startswith(f"{settings.api.frontend_url}/auth/callback?")
        state = parse_qs(parsed.query)["state"][0]

        # Frontend exchanges the handoff token
        response = client.post("/auth/exchange-state", json={"state": state})
        assert response.status_code == 200
        tokens = response.json()
        assert tokens["username"] == "ann_lee"
        assert tokens["email"] == "a@x.com"

        claims = TokenService(settings.auth).verify_access_token(tokens["accessToken"])
        assert claims.email == "a@x.com"
        assert claims.username == "ann_lee"
        assert claims.user_id == tokens["userId"]
        assert claims.roles == ["ROLE_USER"]

        # The handoff token is single use
        replay = client.post("/auth/exchange-state", json={"state": state})
        assert replay.status_code == 401
        assert replay.json()["errorCode"] == "OAUTH_001"

        # The access token works as a bearer
        profile = client.get(
            "/auth/user", headers={"Authorization": f"Bearer {tokens['accessToken']}"}
        ).json()
        assert profile["id"] == tokens["userId"]
        assert profile["firstName"] == "Ann"
        assert profile["lastName"] == "Lee"
        assert profile["provider"] == "google"
        assert profile["status"] == "online"
        assert profile["emailVerified"] is True

    def test_second_login_returns_same_user(self, client):
        first = client.post(
            "/auth/exchange-state",
            json={"state": state_of(callback(client, "google"))},
        ).json()
        second = client.post(
            "/auth/exchange-state",
            json={"state": state_of(callback(client, "google"))},
        ).json()

        assert second["userId"] == first["userId"]
        assert second["username"] == "ann_lee"


class TestCrossProviderLogin:
    def test_facebook_after_google_links_account(self, client):
        """Same email through Facebook lands on the Google-created account."""
        google_state = state_of(callback(client, "google"))
        google = client.post("/auth/exchange-state", json={"state": google_state}).json()

        facebook_state = state_of(callback(client, "facebook"))
        facebook = client.post(
            "/auth/exchange-state", json={"state": facebook_state}
        ).json()

        assert facebook["userId"] == google["userId"]

        profile = client.get(f"/auth/user/{facebook['userId']}").json()
        assert profile["provider"] == "facebook"
        assert profile["profilePicture"] == "https://example.com/ann-fb.png"
