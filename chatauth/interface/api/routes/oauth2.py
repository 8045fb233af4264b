"""OAuth2 login entry and provider callback routes."""

import logging
import secrets

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from chatauth.application.usecase.auth import LoginUseCase
from chatauth.application.usecase.auth.login import LoginRequest
from chatauth.domain.service import AuthService, parse_provider

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth2"], route_class=DishkaRoute)


@router.get("/oauth2/authorization/{provider}")
async def initiate_login(
    provider: str,
    auth_service: FromDishka[AuthService],
) -> RedirectResponse:
    """Start a social login by redirecting to the provider.

    Args:
        provider: "google" or "facebook" (case-insensitive)
        auth_service: Authentication domain service from DI

    Returns:
        HTTP 302 redirect to the provider's authorization page

    Raises:
        UnsupportedProviderError: For any other provider (400)

    Example:
        GET /oauth2/authorization/google
        Redirects to: https://accounts.google.com/o/oauth2/v2/auth?...
    """
    auth_provider = parse_provider(provider)
    logger.info(f"Initiating {auth_provider.value} login")

    state = secrets.token_urlsafe(32)
    auth_url = await auth_service.initiate_login(auth_provider, state)

    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/login/oauth2/code/{provider}")
async def oauth_callback(
    provider: str,
    login_use_case: FromDishka[LoginUseCase],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle the provider callback and complete login.

    Always redirects to the frontend: on success to
    `/auth/callback?state=<handoff token>`, otherwise to `/login?error=<code>`.
    Tokens never appear in the redirect URL.

    Args:
        provider: Provider name from the path
        login_use_case: Login use case from DI
        code: Authorization code from the provider
        state: State parameter echoed by the provider
        error: Provider error (e.g. the user denied consent)

    Returns:
        HTTP 302 redirect to the frontend
    """
    logger.info(f"OAuth callback received: provider={provider}")

    result = await login_use_case.execute(
        LoginRequest(provider=provider, code=code, state=state, error=error)
    )
    if result.success:
        logger.info("Login successful, redirecting to frontend callback")
    else:
        logger.warning("Login failed, redirecting to frontend login page")

    return RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
