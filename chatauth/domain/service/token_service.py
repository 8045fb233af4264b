"""Token issuer domain service."""

from datetime import timedelta

import logfire

from chatauth.config import AuthSettings
from chatauth.domain.error import TokenExpiredError, TokenInvalidError
from chatauth.domain.model import UserAccount
from chatauth.domain.value import Role, TokenPair
from chatauth.util.jwt import (
    JWTError,
    JWTExpiredError,
    TokenPayload,
    create_token,
    verify_token,
)

from .base import Clock, Service, utc_now

DEFAULT_ROLES = [Role.USER.value]


class TokenService(Service):
    """Issues and verifies the service's own access and refresh tokens.

    These are not the provider's tokens: provider tokens are only used while
    completing the OAuth flow. Tokens are self-contained, so validity depends
    only on signature and expiry.
    """

    def __init__(self, auth_settings: AuthSettings, clock: Clock = utc_now) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings (secret, algorithm, lifetimes)
            clock: Source of the current time
        """
        self.auth_settings = auth_settings
        self.clock = clock

    @property
    def access_token_lifetime(self) -> timedelta:
        return timedelta(seconds=self.auth_settings.access_token_expiry_seconds)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return timedelta(seconds=self.auth_settings.refresh_token_expiry_seconds)

    def issue_access_token(self, account: UserAccount) -> str:
        """Issue an access token for an account.

        Claims: userId (external id), email, username, roles, iat, exp.

        Args:
            account: Account to issue the token for

        Returns:
            Signed access token
        """
        with logfire.span(
            "token_service.issue_access_token", user_id=str(account.external_id)
        ):
            return self._mint_access_token(
                user_id=str(account.external_id),
                email=account.email,
                username=account.username.root,
            )

    def issue_refresh_token(self, account: UserAccount) -> str:
        """Issue a refresh token for an account.

        Claims: userId (external id), type="refresh", iat, exp.

        Args:
            account: Account to issue the token for

        Returns:
            Signed refresh token
        """
        with logfire.span(
            "token_service.issue_refresh_token", user_id=str(account.external_id)
        ):
            token = create_token(
                claims={"userId": str(account.external_id)},
                subject=account.email,
                token_type="refresh",
                expires_in=self.refresh_token_lifetime,
                settings=self.auth_settings,
                now=self.clock(),
            )
            logfire.info("Refresh token issued", user_id=str(account.external_id))
            return token

    def issue_token_pair(self, account: UserAccount) -> TokenPair:
        """Issue an access and a refresh token together."""
        return TokenPair(
            access_token=self.issue_access_token(account),
            refresh_token=self.issue_refresh_token(account),
        )

    def verify(self, token: str) -> TokenPayload:
        """Verify a token and return its claims.

        Args:
            token: Signed token

        Returns:
            Token claims

        Raises:
            TokenExpiredError: If the current time is not before the expiry
            TokenInvalidError: If the token is malformed or badly signed
        """
        with logfire.span("token_service.verify"):
            try:
                payload = verify_token(token, self.auth_settings, now=self.clock())
            except JWTExpiredError as e:
                logfire.info("Token expired", error=str(e))
                raise TokenExpiredError(str(e))
            except JWTError as e:
                logfire.warn("Token rejected", error=str(e))
                raise TokenInvalidError(str(e))

            logfire.debug(
                "Token verified", user_id=payload.user_id, token_type=payload.token_type
            )
            return payload

    def verify_access_token(self, token: str) -> TokenPayload:
        """Verify a token that must be an access token.

        Raises:
            TokenInvalidError: If the token is a refresh token or invalid
            TokenExpiredError: If the token has expired
        """
        payload = self.verify(token)
        if payload.token_type != "access":
            logfire.warn("Non-access token used as bearer", user_id=payload.user_id)
            raise TokenInvalidError("Token is not an access token")
        return payload

    def refresh(self, refresh_token: str) -> str:
        """Mint a new access token from a refresh token.

        The refresh token itself is neither rotated nor invalidated.

        Args:
            refresh_token: Signed refresh token

        Returns:
            New access token with a fresh expiry

        Raises:
            TokenInvalidError: If the token is invalid or not a refresh token
            TokenExpiredError: If the refresh token has expired
        """
        with logfire.span("token_service.refresh"):
            payload = self.verify(refresh_token)
            if payload.token_type != "refresh":
                logfire.warn("Refresh rejected: wrong token type", user_id=payload.user_id)
                raise TokenInvalidError("Invalid refresh token")

            return self._mint_access_token(
                user_id=payload.user_id, email=payload.email, username=None
            )

    def _mint_access_token(
        self, user_id: str, email: str, username: str | None
    ) -> str:
        claims: dict[str, object] = {
            "userId": user_id,
            "email": email,
            "roles": DEFAULT_ROLES,
        }
        if username is not None:
            claims["username"] = username

        token = create_token(
            claims=claims,
            subject=email,
            token_type="access",
            expires_in=self.access_token_lifetime,
            settings=self.auth_settings,
            now=self.clock(),
        )
        logfire.info("Access token issued", user_id=user_id)
        return token
