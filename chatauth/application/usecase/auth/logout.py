"""Logout use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from chatauth.application.usecase.base import BaseUseCase
from chatauth.domain.service import UserDirectory
from chatauth.domain.value import CallerContext, ExternalId, OnlineStatus


class LogoutRequest(BaseModel):
    """Logout request. Anonymous logouts are accepted."""

    caller: CallerContext | None = None


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class LogoutUseCase(BaseUseCase):
    """Use case for logging out.

    Tokens are stateless and stay valid until they expire; logout only
    marks the caller offline.
    """

    def __init__(self, user_directory: UserDirectory) -> None:
        self.user_directory = user_directory

    async def execute(self, request: LogoutRequest) -> LogoutResponse:
        if request.caller is not None:
            try:
                external_id = ExternalId(UUID(request.caller.user_id))
            except ValueError:
                external_id = None

            account = (
                await self.user_directory.find_by_external_id(external_id)
                if external_id
                else None
            )
            if account is not None and account.internal_id is not None:
                await self.user_directory.set_online_status(
                    account.internal_id, OnlineStatus.OFFLINE
                )
                logfire.info("User logged out", external_id=str(account.external_id))

        return LogoutResponse(success=True, message="Logout successful")
