"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from chatauth.application.usecase.auth import (
    ExchangeStateUseCase,
    GetCurrentUserUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
)
from chatauth.application.usecase.auth.exchange_state import (
    ExchangeStateRequest,
    ExchangeStateResponse,
)
from chatauth.application.usecase.auth.get_current_user import GetCurrentUserRequest
from chatauth.application.usecase.auth.logout import LogoutRequest, LogoutResponse
from chatauth.application.usecase.auth.refresh_token import (
    RefreshTokenRequest,
    RefreshTokenResponse,
)
from chatauth.application.usecase.user import GetUserProfileUseCase, UserProfileResponse
from chatauth.application.usecase.user.get_user_profile import GetUserProfileRequest
from chatauth.domain.error import AuthenticationError
from chatauth.domain.service import TokenService
from chatauth.interface.api.security import authenticate_caller, extract_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post("/exchange-state", response_model=ExchangeStateResponse)
async def exchange_state(
    request: ExchangeStateRequest,
    exchange_state_use_case: FromDishka[ExchangeStateUseCase],
) -> ExchangeStateResponse:
    """Exchange a one-time handoff token for the issued tokens.

    Example:
        POST /auth/exchange-state
        {"state": "6f1c..."}

        Response:
        {
            "accessToken": "...",
            "refreshToken": "...",
            "userId": "...",
            "username": "ann_lee",
            "email": "a@x.com"
        }

    Raises:
        StateTokenMissingError: If no state was sent (400)
        StateTokenInvalidError: If the state is unknown, expired or used (401)
    """
    return await exchange_state_use_case.execute(request)


@router.post("/refresh", response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshTokenRequest,
    refresh_token_use_case: FromDishka[RefreshTokenUseCase],
) -> RefreshTokenResponse:
    """Mint a new access token from a refresh token.

    Example:
        POST /auth/refresh
        {"refreshToken": "..."}

        Response:
        {"accessToken": "..."}
    """
    return await refresh_token_use_case.execute(request)


@router.get("/user", response_model=UserProfileResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token_service: FromDishka[TokenService],
    authorization: str | None = Header(default=None),
) -> UserProfileResponse:
    """Get the authenticated caller's profile.

    Requires `Authorization: Bearer <access token>`.
    """
    caller = authenticate_caller(token_service, authorization)
    return await get_current_user_use_case.execute(GetCurrentUserRequest(caller=caller))


@router.get("/user/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> UserProfileResponse:
    """Get a user's profile by external id."""
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(user_id=user_id)
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    logout_use_case: FromDishka[LogoutUseCase],
    token_service: FromDishka[TokenService],
    authorization: str | None = Header(default=None),
) -> LogoutResponse:
    """Log out. Marks the caller offline when a valid bearer token is sent.

    Tokens are stateless; the client discards them.
    """
    caller = None
    if extract_bearer_token(authorization):
        try:
            caller = authenticate_caller(token_service, authorization)
        except AuthenticationError as e:
            logger.info(f"Logout with unusable token: {type(e).__name__}")

    return await logout_use_case.execute(LogoutRequest(caller=caller))
