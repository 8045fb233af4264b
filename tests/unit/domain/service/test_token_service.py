"""Unit tests for TokenService."""

import uuid
from datetime import timezone

import jwt
import pytest

from chatauth.config import AuthSettings
from chatauth.domain.error import TokenExpiredError, TokenInvalidError
from chatauth.domain.model import UserAccount
from chatauth.domain.service import TokenService
from chatauth.domain.value import AuthProvider, ExternalId, InternalId, Username


def make_account() -> UserAccount:
    return UserAccount(
        internal_id=InternalId(1),
        external_id=ExternalId(uuid.UUID("11111111-2222-3333-4444-555555555555")),
        email="a@x.com",
        username=Username("ann_lee"),
        first_name="Ann",
        last_name="Lee",
        provider=AuthProvider.GOOGLE,
        provider_user_id="g123",
        email_verified=True,
    )


class TestIssueTokens:
    """Tests for token issuance."""

    def test_access_token_carries_identity_claims(self, auth_settings, clock):
        """Access token should carry userId, email, username and roles."""
        service = TokenService(auth_settings, clock=clock)

        token = service.issue_access_token(make_account())
        payload = service.verify(token)

        assert payload.user_id == "11111111-2222-3333-4444-555555555555"
        assert payload.email == "a@x.com"
        assert payload.username == "ann_lee"
        assert payload.roles == ["ROLE_USER"]
        assert payload.token_type == "access"

    def test_access_token_expiry_matches_configured_lifetime(self, auth_settings, clock):
        """exp - iat should equal the access token lifetime."""
        service = TokenService(auth_settings, clock=clock)

        payload = service.verify(service.issue_access_token(make_account()))

        assert (payload.exp - payload.iat).total_seconds() == 86400
        assert payload.iat == clock.now.astimezone(timezone.utc)

    def test_refresh_token_has_refresh_type_and_longer_lifetime(
        self, auth_settings, clock
    ):
        """Refresh token should be typed 'refresh' and live 7 days."""
        service = TokenService(auth_settings, clock=clock)

        payload = service.verify(service.issue_refresh_token(make_account()))

        assert payload.token_type == "refresh"
        assert payload.username is None
        assert (payload.exp - payload.iat).total_seconds() == 604800

    def test_token_pair_uses_hs512(self, auth_settings, clock):
        """Issued tokens should be signed with the configured algorithm."""
        service = TokenService(auth_settings, clock=clock)

        pair = service.issue_token_pair(make_account())

        assert jwt.get_unverified_header(pair.access_token)["alg"] == "HS512"
        assert jwt.get_unverified_header(pair.refresh_token)["alg"] == "HS512"


class TestVerify:
    """Tests for token verification."""

    def test_token_valid_one_second_before_expiry(self, auth_settings, clock):
        """A token is still valid strictly before its expiry."""
        service = TokenService(auth_settings, clock=clock)
        token = service.issue_access_token(make_account())

        clock.advance(86399)

        assert service.verify(token).email == "a@x.com"

    def test_token_expired_exactly_at_expiry(self, auth_settings, clock):
        """Expiry is exclusive: at exactly exp the token is expired."""
        service = TokenService(auth_settings, clock=clock)
        token = service.issue_access_token(make_account())

        clock.advance(86400)

        with pytest.raises(TokenExpiredError):
            service.verify(token)

    def test_token_signed_with_other_secret_is_invalid(self, auth_settings, clock):
        """A token signed with a different secret should be rejected."""
        other = TokenService(
            AuthSettings(jwt_secret="another-secret-" + "y" * 64), clock=clock
        )
        token = other.issue_access_token(make_account())

        with pytest.raises(TokenInvalidError):
            TokenService(auth_settings, clock=clock).verify(token)

    def test_garbage_token_is_invalid(self, auth_settings, clock):
        """A malformed token should be rejected as invalid, not expired."""
        service = TokenService(auth_settings, clock=clock)

        with pytest.raises(TokenInvalidError):
            service.verify("not-a-jwt")

    def test_refresh_token_rejected_as_bearer(self, auth_settings, clock):
        """Only access tokens authenticate requests."""
        service = TokenService(auth_settings, clock=clock)
        refresh_token = service.issue_refresh_token(make_account())

        with pytest.raises(TokenInvalidError):
            service.verify_access_token(refresh_token)


class TestRefresh:
    """Tests for TokenService.refresh()."""

    def test_refresh_mints_new_access_token(self, auth_settings, clock):
        """Refresh should mint an access token for the same user."""
        service = TokenService(auth_settings, clock=clock)
        refresh_token = service.issue_refresh_token(make_account())

        clock.advance(3600)
        access_token = service.refresh(refresh_token)
        payload = service.verify_access_token(access_token)

        assert payload.user_id == "11111111-2222-3333-4444-555555555555"
        assert payload.email == "a@x.com"
        assert payload.roles == ["ROLE_USER"]
        assert payload.iat == clock.now

    def test_refresh_with_access_token_is_rejected(self, auth_settings, clock):
        """An access token cannot be used to refresh."""
        service = TokenService(auth_settings, clock=clock)
        access_token = service.issue_access_token(make_account())

        with pytest.raises(TokenInvalidError):
            service.refresh(access_token)

    def test_refresh_with_expired_token_is_rejected(self, auth_settings, clock):
        """An expired refresh token cannot be used."""
        service = TokenService(auth_settings, clock=clock)
        refresh_token = service.issue_refresh_token(make_account())

        clock.advance(604800)

        with pytest.raises(TokenExpiredError):
            service.refresh(refresh_token)
