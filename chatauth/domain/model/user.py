"""User account aggregate root.

Accounts are created by the social-login pipeline the first time an
identity is seen, and linked to further providers by email.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from chatauth.domain.model.common import DomainModel
from chatauth.domain.value import (
    AuthProvider,
    ExternalId,
    InternalId,
    OnlineStatus,
    Username,
)

# Password hash for accounts that can only sign in through a provider.
# Not a valid hash of anything, so password checks can never succeed.
OAUTH2_ONLY_PASSWORD_HASH = "!oauth2"

SYSTEM_USER = "system"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class UserAccount(DomainModel):
    """User account aggregate root.

    `internal_id` is assigned by the store on insert and never leaves the
    service; `external_id` is what clients and tokens see.
    """

    internal_id: Optional[InternalId] = None
    external_id: ExternalId
    email: str
    username: Username
    password_hash: str = OAUTH2_ONLY_PASSWORD_HASH
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_url: Optional[str] = None
    provider: AuthProvider
    provider_user_id: Optional[str] = None
    email_verified: bool = False
    enabled: bool = True
    status: OnlineStatus = OnlineStatus.OFFLINE

    # Audit columns
    created_by: str = SYSTEM_USER
    created_at: datetime = Field(default_factory=_now)
    modified_by: str = SYSTEM_USER
    modified_at: datetime = Field(default_factory=_now)
    version: int = Field(default=0, ge=0)
