"""Unit tests for LoginUseCase."""

from urllib.parse import parse_qs, urlparse

from dishka import AsyncContainer
import pytest

from chatauth.adapter.error import ProviderAuthError
from chatauth.adapter.facebook.client import MockFacebookOAuthClient
from chatauth.adapter.google.client import MockGoogleOAuthClient
from chatauth.application.usecase.auth.login import LoginRequest, LoginUseCase
from chatauth.config import Settings
from chatauth.domain.service import (
    AuthService,
    IdentityNormalizer,
    StateTokenService,
    TokenService,
    UserDirectory,
)
from chatauth.domain.value import AuthProvider, OAuth2Principal, OnlineStatus
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class FailingOAuthClient(MockGoogleOAuthClient):
    """Google client whose code exchange always fails."""

    async def complete_authorization(self, code, state):
        raise ProviderAuthError("google", "token exchange failed: 400")


async def build_login_use_case(
    env: AsyncContainer, oauth_clients: dict | None = None
) -> LoginUseCase:
    """Login use case from the container, optionally with other OAuth clients."""
    if oauth_clients is None:
        return await env.get(LoginUseCase)
    return LoginUseCase(
        auth_service=AuthService(oauth_clients=oauth_clients),
        identity_normalizer=await env.get(IdentityNormalizer),
        user_directory=await env.get(UserDirectory),
        token_service=await env.get(TokenService),
        state_token_service=await env.get(StateTokenService),
        settings=await env.get(Settings),
    )


def error_of(redirect_url: str) -> str:
    return parse_qs(urlparse(redirect_url).query)["error"][0]


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_first_google_login_redirects_with_state(
        self, unit_env: AsyncContainer
    ):
        """First login creates the account, marks it online and hands off tokens."""
        # Arrange
        login_use_case = await build_login_use_case(unit_env)
        user_directory = await unit_env.get(UserDirectory)
        state_token_service = await unit_env.get(StateTokenService)
        settings = await unit_env.get(Settings)

        # Act
        response = await login_use_case.execute(
            LoginRequest(provider="google", code="code-1", state="state-1")
        )

        # Assert
        assert response.success is True
        parsed = urlparse(response.redirect_url)
        assert response.redirect_url.startswith(
            f"{settings.api.frontend_url}/auth/callback?"
        )
        state = parse_qs(parsed.query)["state"][0]
        assert list(parse_qs(parsed.query)) == ["state"]

        account = await user_directory.find_by_email("a@x.com")
        assert account is not None
        assert account.username.root == "ann_lee"
        assert account.status == OnlineStatus.ONLINE

        payload = await state_token_service.exchange(state)
        assert payload.email == "a@x.com"
        assert payload.username == "ann_lee"
        assert payload.user_id == str(account.external_id)

    @pytest.mark.asyncio
    async def test_provider_name_is_case_insensitive(self, unit_env):
        login_use_case = await build_login_use_case(unit_env)

        response = await login_use_case.execute(
            LoginRequest(provider="GOOGLE", code="code-1", state="state-1")
        )

        assert response.success is True

    @pytest.mark.asyncio
    async def test_provider_error_redirects_to_login(self, unit_env):
        """A denied consent should redirect with oauth_failed."""
        login_use_case = await build_login_use_case(unit_env)
        settings = await unit_env.get(Settings)

        response = await login_use_case.execute(
            LoginRequest(provider="google", error="access_denied")
        )

        assert response.success is False
        assert response.redirect_url.startswith(f"{settings.api.frontend_url}/login?")
        assert error_of(response.redirect_url) == "oauth_failed"

    @pytest.mark.asyncio
    async def test_missing_code_redirects_to_login(self, unit_env):
        login_use_case = await build_login_use_case(unit_env)

        response = await login_use_case.execute(
            LoginRequest(provider="google", state="state-1")
        )

        assert error_of(response.redirect_url) == "oauth_failed"

    @pytest.mark.asyncio
    async def test_unsupported_provider(self, unit_env):
        login_use_case = await build_login_use_case(unit_env)

        response = await login_use_case.execute(
            LoginRequest(provider="twitter", code="code-1", state="state-1")
        )

        assert error_of(response.redirect_url) == "unsupported_provider"

    @pytest.mark.asyncio
    async def test_facebook_without_email(self, unit_env):
        """A Facebook account that shares no email cannot log in."""
        login_use_case = await build_login_use_case(
            unit_env,
            {
                AuthProvider.FACEBOOK: MockFacebookOAuthClient(
                    attributes={"id": "fb456", "name": "No Mail"}
                )
            },
        )

        response = await login_use_case.execute(
            LoginRequest(provider="facebook", code="code-1", state="state-1")
        )

        assert error_of(response.redirect_url) == "email_not_found"

    @pytest.mark.asyncio
    async def test_facebook_without_id_does_not_reuse_accounts(self, unit_env):
        """Two id-less payloads must not resolve to one shared account."""
        user_directory = await unit_env.get(UserDirectory)
        for name, email in (("Ann Lee", "ann@x.com"), ("Bob Roe", "bob@x.com")):
            login_use_case = await build_login_use_case(
                unit_env,
                {
                    AuthProvider.FACEBOOK: MockFacebookOAuthClient(
                        attributes={"name": name, "email": email}
                    )
                },
            )

            response = await login_use_case.execute(
                LoginRequest(provider="facebook", code="code-1", state="state-1")
            )

            assert error_of(response.redirect_url) == "oauth_failed"

        assert await user_directory.find_by_email("ann@x.com") is None
        assert await user_directory.find_by_email("bob@x.com") is None

    @pytest.mark.asyncio
    async def test_code_exchange_failure(self, unit_env):
        login_use_case = await build_login_use_case(
            unit_env, {AuthProvider.GOOGLE: FailingOAuthClient()}
        )

        response = await login_use_case.execute(
            LoginRequest(provider="google", code="bad-code", state="state-1")
        )

        assert error_of(response.redirect_url) == "oauth_failed"

    @pytest.mark.asyncio
    async def test_google_then_facebook_reuses_account(self, unit_env):
        """Logging in with Facebook after Google links to the same account."""
        login_use_case = await build_login_use_case(unit_env)
        user_directory = await unit_env.get(UserDirectory)

        await login_use_case.execute(
            LoginRequest(provider="google", code="code-1", state="state-1")
        )
        google_account = await user_directory.find_by_email("a@x.com")

        response = await login_use_case.execute(
            LoginRequest(provider="facebook", code="code-2", state="state-2")
        )

        assert response.success is True
        linked = await user_directory.find_by_email("a@x.com")
        assert linked.external_id == google_account.external_id
        assert linked.provider == AuthProvider.FACEBOOK
        assert linked.provider_user_id == "fb456"


class TestOnAuthenticationSuccess:
    """Tests for LoginUseCase.on_authentication_success()."""

    @pytest.mark.asyncio
    async def test_unknown_email_redirects_user_not_found(self, unit_env):
        login_use_case = await build_login_use_case(unit_env)
        principal = OAuth2Principal(
            provider=AuthProvider.FACEBOOK,
            attributes={"id": "fb999", "email": "nobody@x.com"},
        )

        response = await login_use_case.on_authentication_success(principal)

        assert error_of(response.redirect_url) == "user_not_found"

    @pytest.mark.asyncio
    async def test_principal_without_email(self, unit_env):
        login_use_case = await build_login_use_case(unit_env)
        principal = OAuth2Principal(
            provider=AuthProvider.FACEBOOK, attributes={"id": "fb999"}
        )

        response = await login_use_case.on_authentication_success(principal)

        assert error_of(response.redirect_url) == "email_not_found"
