"""User use cases."""

from .get_user_profile import GetUserProfileUseCase, UserProfileResponse

__all__ = ["GetUserProfileUseCase", "UserProfileResponse"]
