"""Exchange state token use case."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from chatauth.application.usecase.base import BaseUseCase
from chatauth.domain.service import StateTokenService


class ExchangeStateRequest(BaseModel):
    """Handoff token received in the login redirect."""

    state: str | None = None


class ExchangeStateResponse(BaseModel):
    """Tokens and identity fields released by the exchange."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    access_token: str
    refresh_token: str
    user_id: str
    username: str
    email: str


class ExchangeStateUseCase(BaseUseCase):
    """Use case for the frontend's one-time token exchange."""

    def __init__(self, state_token_service: StateTokenService) -> None:
        self.state_token_service = state_token_service

    async def execute(self, request: ExchangeStateRequest) -> ExchangeStateResponse:
        """Consume a handoff token.

        Raises:
            StateTokenMissingError: If no token was sent
            StateTokenInvalidError: If the token is unknown, expired or used
        """
        payload = await self.state_token_service.exchange(request.state)
        return ExchangeStateResponse(
            access_token=payload.access_token,
            refresh_token=payload.refresh_token,
            user_id=payload.user_id,
            username=payload.username,
            email=payload.email,
        )
