"""User account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from chatauth.domain.model.user import UserAccount
from chatauth.domain.value import (
    AuthProvider,
    ExternalId,
    InternalId,
    OnlineStatus,
    Username,
)


class UserRepository(ABC):
    """Repository for the UserAccount aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer and must enforce
    uniqueness of email, username, external id and
    (provider, provider_user_id) atomically.
    """

    @abstractmethod
    async def find_by_internal_id(
        self, internal_id: InternalId
    ) -> Optional[UserAccount]:
        """Find an account by its internal primary key.

        Args:
            internal_id: Internal account id

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_external_id(
        self, external_id: ExternalId
    ) -> Optional[UserAccount]:
        """Find an account by its public identifier.

        Args:
            external_id: External account id

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[UserAccount]:
        """Find an account by email.

        Args:
            email: Email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserAccount]:
        """Find an account by its linked provider identity.

        Args:
            provider: The authentication provider
            provider_user_id: The user's ID on that provider

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_by_username(self, username: Username) -> bool:
        """Check whether a username is taken.

        Args:
            username: Candidate username

        Returns:
            True if an account already uses it
        """
        pass

    @abstractmethod
    async def create(self, account: UserAccount) -> UserAccount:
        """Insert a new account.

        Args:
            account: Account without an internal id

        Returns:
            The stored account with its internal id assigned

        Raises:
            DuplicateAccountError: If a unique key is already taken
        """
        pass

    @abstractmethod
    async def update(self, account: UserAccount) -> UserAccount:
        """Update an existing account under optimistic locking.

        The stored row must still carry `account.version`; the returned
        account has the version incremented.

        Args:
            account: Account with the version it was read at

        Returns:
            The updated account

        Raises:
            ConcurrentModificationError: If the row changed since it was read
            DuplicateAccountError: If the update collides with another account
        """
        pass

    @abstractmethod
    async def update_status(
        self, internal_id: InternalId, status: OnlineStatus
    ) -> None:
        """Atomically set the online status of an account.

        Args:
            internal_id: Internal account id
            status: New status
        """
        pass
