"""Refresh access token use case."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from chatauth.application.usecase.base import BaseUseCase
from chatauth.domain.service import TokenService


class RefreshTokenRequest(BaseModel):
    """Refresh request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    refresh_token: str


class RefreshTokenResponse(BaseModel):
    """Newly minted access token."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str


class RefreshTokenUseCase(BaseUseCase):
    """Use case for minting a new access token from a refresh token."""

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    async def execute(self, request: RefreshTokenRequest) -> RefreshTokenResponse:
        """Execute refresh.

        Raises:
            TokenInvalidError: If the token is invalid or not a refresh token
            TokenExpiredError: If the refresh token has expired
        """
        access_token = self.token_service.refresh(request.refresh_token)
        return RefreshTokenResponse(access_token=access_token)
