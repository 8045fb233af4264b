"""Login use case."""

from urllib.parse import urlencode

import logfire
from pydantic import BaseModel

from chatauth.config import Settings
from chatauth.domain.error import (
    ConflictError,
    ExternalProviderError,
    MissingEmailError,
    UnsupportedProviderError,
)
from chatauth.domain.service import (
    AuthService,
    IdentityNormalizer,
    StateTokenService,
    TokenService,
    UserDirectory,
    parse_provider,
)
from chatauth.domain.value import AuthenticatedPrincipal, HandoffPayload, OnlineStatus

# Opaque error codes sent to the frontend login page
EMAIL_NOT_FOUND = "email_not_found"
USER_NOT_FOUND = "user_not_found"
OAUTH_FAILED = "oauth_failed"
UNSUPPORTED_PROVIDER = "unsupported_provider"
ACCOUNT_CONFLICT = "account_conflict"
LOGIN_FAILED = "login_failed"


class LoginRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: str  # Provider name from the callback path
    code: str | None = None  # OAuth authorization code
    state: str | None = None  # State parameter for session verification
    error: str | None = None  # Set by the provider when the user denies consent


class LoginResponse(BaseModel):
    """Where to send the browser after the callback."""

    redirect_url: str
    success: bool


class LoginUseCase:
    """Use case for completing a social login and handing tokens to the frontend.

    Every outcome is a redirect to the frontend: success carries a one-time
    handoff token, failure an opaque error code.
    """

    def __init__(
        self,
        auth_service: AuthService,
        identity_normalizer: IdentityNormalizer,
        user_directory: UserDirectory,
        token_service: TokenService,
        state_token_service: StateTokenService,
        settings: Settings,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            identity_normalizer: Maps provider payloads to identities
            user_directory: Account lookup and creation
            token_service: Access/refresh token issuer
            state_token_service: One-time handoff store
            settings: Application settings
        """
        self.auth_service = auth_service
        self.identity_normalizer = identity_normalizer
        self.user_directory = user_directory
        self.token_service = token_service
        self.state_token_service = state_token_service
        self.settings = settings

    @property
    def frontend_url(self) -> str:
        return self.settings.api.frontend_url

    def _error_redirect(self, code: str) -> LoginResponse:
        return LoginResponse(
            redirect_url=f"{self.frontend_url}/login?{urlencode({'error': code})}",
            success=False,
        )

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute the callback leg of the login flow.

        Steps:
        1. Complete OAuth with the provider and get a principal
        2. Normalize the principal into an identity
        3. Resolve the identity to an account (update, link or create)
        4. Issue tokens and redirect with a handoff token

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Redirect to the frontend (never raises)
        """
        with logfire.span("login_user", provider=request.provider):
            if request.error or not request.code or not request.state:
                logfire.warn(
                    "OAuth callback without code",
                    provider=request.provider,
                    error=request.error,
                )
                return self._error_redirect(OAUTH_FAILED)

            try:
                provider = parse_provider(request.provider)
                principal = await self.auth_service.complete_login(
                    provider, request.code, request.state
                )
                identity = self.identity_normalizer.normalize_principal(principal)
                account = await self.user_directory.resolve(identity)
                logfire.info(
                    "Account resolved",
                    provider=provider.value,
                    external_id=str(account.external_id),
                )
            except UnsupportedProviderError as e:
                logfire.warn("Login with unsupported provider", error=str(e))
                return self._error_redirect(UNSUPPORTED_PROVIDER)
            except MissingEmailError as e:
                logfire.warn("Provider returned no email", error=str(e))
                return self._error_redirect(EMAIL_NOT_FOUND)
            except ExternalProviderError as e:
                logfire.error("OAuth exchange failed", error=str(e))
                return self._error_redirect(OAUTH_FAILED)
            except ConflictError as e:
                logfire.error("Account conflict during login", error=str(e))
                return self._error_redirect(ACCOUNT_CONFLICT)
            except Exception as e:
                logfire.exception("Unexpected error during login", error=str(e))
                return self._error_redirect(LOGIN_FAILED)

            return await self.on_authentication_success(principal)

    async def on_authentication_success(
        self, principal: AuthenticatedPrincipal
    ) -> LoginResponse:
        """Issue tokens for an authenticated principal and build the redirect.

        Args:
            principal: Principal returned by the provider client

        Returns:
            Redirect to `/auth/callback?state=...` or to `/login?error=...`
        """
        with logfire.span(
            "login.on_authentication_success", provider=principal.provider.value
        ):
            try:
                email = self.identity_normalizer.extract_email(principal)
                if not email:
                    logfire.warn(
                        "No email in authenticated principal",
                        provider=principal.provider.value,
                    )
                    return self._error_redirect(EMAIL_NOT_FOUND)

                account = await self.user_directory.find_by_email(email)
                if account is None or account.internal_id is None:
                    logfire.warn("No account for authenticated email")
                    return self._error_redirect(USER_NOT_FOUND)

                await self.user_directory.set_online_status(
                    account.internal_id, OnlineStatus.ONLINE
                )
                tokens = self.token_service.issue_token_pair(account)

                handoff_token = await self.state_token_service.store(
                    HandoffPayload(
                        access_token=tokens.access_token,
                        refresh_token=tokens.refresh_token,
                        user_id=str(account.external_id),
                        username=account.username.root,
                        email=account.email,
                    )
                )
            except Exception as e:
                logfire.exception("Failed to complete login", error=str(e))
                return self._error_redirect(LOGIN_FAILED)

            logfire.info(
                "Login successful, redirecting to frontend",
                external_id=str(account.external_id),
            )
            query = urlencode({"state": handoff_token})
            return LoginResponse(
                redirect_url=f"{self.frontend_url}/auth/callback?{query}",
                success=True,
            )
