"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from chatauth.domain.error import NotFoundError
from chatauth.domain.model import UserAccount
from chatauth.domain.service import UserDirectory
from chatauth.domain.value import AuthProvider, ExternalId, OnlineStatus


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str  # External id


class UserProfileResponse(BaseModel):
    """Profile as shown to clients. The internal id is never included."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    profile_picture: str | None
    provider: AuthProvider
    email_verified: bool
    status: OnlineStatus
    created_at: datetime
    last_modified: datetime

    @classmethod
    def from_account(cls, account: UserAccount) -> "UserProfileResponse":
        return cls(
            id=str(account.external_id),
            username=account.username.root,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            profile_picture=account.avatar_url,
            provider=account.provider,
            email_verified=account.email_verified,
            status=account.status,
            created_at=account.created_at,
            last_modified=account.modified_at,
        )


class GetUserProfileUseCase:
    """Use case for getting a user's profile by external id."""

    def __init__(self, user_directory: UserDirectory) -> None:
        """Initialize get user profile use case.

        Args:
            user_directory: Account lookup service
        """
        self.user_directory = user_directory

    async def execute(self, request: GetUserProfileRequest) -> UserProfileResponse:
        """Execute get user profile flow.

        Args:
            request: Request with the external id

        Returns:
            User profile

        Raises:
            NotFoundError: If no account has that id (or it is not a UUID)
        """
        try:
            external_id = ExternalId(UUID(request.user_id))
        except ValueError:
            raise NotFoundError("User", request.user_id)

        account = await self.user_directory.get_by_external_id(external_id)
        return UserProfileResponse.from_account(account)
