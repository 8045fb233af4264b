"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from chatauth.domain.error import (
    ConcurrentModificationError,
    DuplicateAccountError,
    NotFoundError,
)
from chatauth.domain.model.user import SYSTEM_USER, UserAccount
from chatauth.domain.repository.user import UserRepository
from chatauth.domain.value import (
    AuthProvider,
    ExternalId,
    InternalId,
    OnlineStatus,
    Username,
)


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same unique keys as the database schema. Checks and writes
    happen without awaiting, so they are atomic on a single event loop.
    """

    def __init__(self) -> None:
        self._users: dict[InternalId, UserAccount] = {}
        self._next_id = 1

    def _find(self, predicate) -> Optional[UserAccount]:
        for user in self._users.values():
            if predicate(user):
                return user
        return None

    def _check_unique(self, account: UserAccount) -> None:
        for other in self._users.values():
            if other.internal_id == account.internal_id:
                continue
            if other.external_id == account.external_id:
                raise DuplicateAccountError("external_id", str(account.external_id))
            if other.email == account.email:
                raise DuplicateAccountError("email", account.email)
            if other.username == account.username:
                raise DuplicateAccountError("username", account.username.root)
            if (
                account.provider_user_id is not None
                and other.provider == account.provider
                and other.provider_user_id == account.provider_user_id
            ):
                raise DuplicateAccountError(
                    "provider_user_id", account.provider_user_id
                )

    async def find_by_internal_id(
        self, internal_id: InternalId
    ) -> Optional[UserAccount]:
        """Find an account by internal id."""
        return self._users.get(internal_id)

    async def find_by_external_id(
        self, external_id: ExternalId
    ) -> Optional[UserAccount]:
        """Find an account by external id."""
        return self._find(lambda u: u.external_id == external_id)

    async def find_by_email(self, email: str) -> Optional[UserAccount]:
        """Find an account by email."""
        return self._find(lambda u: u.email == email)

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserAccount]:
        """Find an account by its linked provider identity."""
        return self._find(
            lambda u: u.provider == provider
            and u.provider_user_id == provider_user_id
        )

    async def exists_by_username(self, username: Username) -> bool:
        """Check whether a username is taken."""
        return self._find(lambda u: u.username == username) is not None

    async def create(self, account: UserAccount) -> UserAccount:
        """Insert a new account, assigning an internal id."""
        self._check_unique(account)
        stored = account.model_copy(update={"internal_id": InternalId(self._next_id)})
        self._next_id += 1
        self._users[stored.internal_id] = stored
        return stored

    async def update(self, account: UserAccount) -> UserAccount:
        """Update an account if its version still matches."""
        current = (
            self._users.get(account.internal_id)
            if account.internal_id is not None
            else None
        )
        if current is None:
            raise NotFoundError("User", str(account.external_id))
        if current.version != account.version:
            raise ConcurrentModificationError(
                "User", str(account.external_id), account.version
            )
        self._check_unique(account)

        stored = account.model_copy(
            update={
                "external_id": current.external_id,
                "created_by": current.created_by,
                "created_at": current.created_at,
                "version": account.version + 1,
            }
        )
        self._users[stored.internal_id] = stored
        return stored

    async def update_status(
        self, internal_id: InternalId, status: OnlineStatus
    ) -> None:
        """Set the online status of an account."""
        current = self._users.get(internal_id)
        if current:
            self._users[internal_id] = current.model_copy(
                update={
                    "status": status,
                    "modified_by": SYSTEM_USER,
                    "modified_at": datetime.now(timezone.utc),
                    "version": current.version + 1,
                }
            )

    def all(self) -> list[UserAccount]:
        """All stored accounts (test helper)."""
        return list(self._users.values())
