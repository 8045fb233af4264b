"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from chatauth.application.usecase.user.get_user_profile import UserProfileResponse
from chatauth.domain.error import NotFoundError, TokenInvalidError
from chatauth.domain.service import UserDirectory
from chatauth.domain.value import CallerContext, ExternalId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    caller: CallerContext


class GetCurrentUserUseCase:
    """Use case for getting the authenticated caller's profile."""

    def __init__(self, user_directory: UserDirectory) -> None:
        """Initialize get current user use case.

        Args:
            user_directory: Account lookup service
        """
        self.user_directory = user_directory

    async def execute(self, request: GetCurrentUserRequest) -> UserProfileResponse:
        """Execute get current user flow.

        Args:
            request: Request with the verified caller

        Returns:
            The caller's profile

        Raises:
            TokenInvalidError: If the token's user id is not a UUID
            NotFoundError: If the account no longer exists
        """
        try:
            external_id = ExternalId(UUID(request.caller.user_id))
        except ValueError:
            raise TokenInvalidError("Token carries a malformed user id")

        account = await self.user_directory.find_by_external_id(external_id)
        if account is None:
            raise NotFoundError("User", request.caller.user_id)
        return UserProfileResponse.from_account(account)
