"""Domain value objects for chat identity.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from chatauth.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    LOCAL = "local"
    GOOGLE = "google"
    FACEBOOK = "facebook"


class OnlineStatus(str, Enum):
    """Presence status shown to other chat users."""

    ONLINE = "online"
    OFFLINE = "offline"
    AWAY = "away"
    BUSY = "busy"


class Role(str, Enum):
    """Roles carried in access tokens."""

    USER = "ROLE_USER"


class Username(RootValueObject[str]):
    """Unique username derived from a display name.

    Lowercase alphanumerics separated by single underscores,
    e.g. 'ann_lee' or 'ann_lee_2'.
    """

    @field_validator("root")
    @classmethod
    def validate_username_format(cls, v: str) -> str:
        """Validate username format."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        if not re.match(r"^[a-z0-9]+(?:_[a-z0-9]+)*$", v):
            raise ValueError(
                "Username must be lowercase alphanumeric separated by single underscores"
            )
        return v


class NormalizedIdentity(ValueObject):
    """Provider-agnostic identity extracted from a provider payload.

    Transient: built once per login and never persisted directly.
    Email is mandatory because it is the cross-provider linking key.
    """

    provider: AuthProvider
    provider_user_id: str  # 'sub' for Google, 'id' for Facebook
    email: str
    display_name: str | None = None
    avatar_url: str | None = None


class TokenPair(ValueObject):
    """Access and refresh tokens issued together at login."""

    access_token: str
    refresh_token: str


class HandoffPayload(ValueObject):
    """What the frontend receives when it exchanges a handoff token."""

    access_token: str
    refresh_token: str
    user_id: str  # External id
    username: str
    email: str


class CallerContext(ValueObject):
    """Authenticated caller, built from a verified access token.

    Passed explicitly to use cases that act on behalf of the caller.
    """

    user_id: str  # External id
    email: str
    username: str | None = None
    roles: list[str] = [Role.USER.value]
