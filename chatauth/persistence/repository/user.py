"""PostgreSQL implementation of User repository."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chatauth.domain.error import (
    ConcurrentModificationError,
    DuplicateAccountError,
    NotFoundError,
)
from chatauth.domain.model import UserAccount
from chatauth.domain.model.user import SYSTEM_USER
from chatauth.domain.repository import UserRepository
from chatauth.domain.value import (
    AuthProvider,
    ExternalId,
    InternalId,
    OnlineStatus,
    Username,
)
from chatauth.persistence.mappers import row_to_user, user_to_dict
from chatauth.persistence.tables import UNIQUE_CONSTRAINT_FIELDS, users_table


def _duplicate_error(error: IntegrityError, account: UserAccount) -> DuplicateAccountError:
    """Translate a unique violation into a domain error."""
    message = str(error.orig)
    for constraint, field in UNIQUE_CONSTRAINT_FIELDS.items():
        if constraint in message:
            return DuplicateAccountError(field, str(getattr(account, field)))
    return DuplicateAccountError("account", account.email)


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, *criteria) -> Optional[UserAccount]:
        stmt = select(users_table).where(*criteria)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_internal_id(
        self, internal_id: InternalId
    ) -> Optional[UserAccount]:
        """Find an account by internal id."""
        return await self._find_one(users_table.c.id == internal_id)

    async def find_by_external_id(
        self, external_id: ExternalId
    ) -> Optional[UserAccount]:
        """Find an account by external id."""
        return await self._find_one(users_table.c.external_id == external_id)

    async def find_by_email(self, email: str) -> Optional[UserAccount]:
        """Find an account by email."""
        return await self._find_one(users_table.c.email == email)

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserAccount]:
        """Find an account by its linked provider identity."""
        return await self._find_one(
            users_table.c.provider == provider.value,
            users_table.c.provider_user_id == provider_user_id,
        )

    async def exists_by_username(self, username: Username) -> bool:
        """Check whether a username is taken."""
        stmt = select(users_table.c.id).where(users_table.c.username == username.root)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, account: UserAccount) -> UserAccount:
        """Insert a new account.

        The insert runs in a SAVEPOINT so a unique violation leaves the
        surrounding transaction usable for the caller's re-lookup.

        Args:
            account: Account without an internal id

        Returns:
            The stored account with its internal id assigned

        Raises:
            DuplicateAccountError: If a unique key is already taken
        """
        stmt = (
            users_table.insert()
            .values(**user_to_dict(account))
            .returning(*users_table.c)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().one()
        except IntegrityError as e:
            raise _duplicate_error(e, account) from e
        return row_to_user(dict(row))

    async def update(self, account: UserAccount) -> UserAccount:
        """Update an account if its version still matches.

        Args:
            account: Account with the version it was read at

        Returns:
            The updated account with the version incremented

        Raises:
            ConcurrentModificationError: If the row changed since it was read
            DuplicateAccountError: If the update collides with another account
            NotFoundError: If the account no longer exists
        """
        if account.internal_id is None:
            raise NotFoundError("User", str(account.external_id))

        values = user_to_dict(account)
        values.pop("external_id")  # Immutable
        values.pop("created_by")
        values.pop("created_at")
        values["version"] = account.version + 1

        stmt = (
            users_table.update()
            .where(users_table.c.id == account.internal_id)
            .where(users_table.c.version == account.version)
            .values(**values)
            .returning(*users_table.c)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except IntegrityError as e:
            raise _duplicate_error(e, account) from e

        if row is None:
            if await self.find_by_internal_id(account.internal_id) is None:
                raise NotFoundError("User", str(account.external_id))
            raise ConcurrentModificationError(
                "User", str(account.external_id), account.version
            )
        return row_to_user(dict(row))

    async def update_status(
        self, internal_id: InternalId, status: OnlineStatus
    ) -> None:
        """Atomically set the online status of an account."""
        stmt = (
            users_table.update()
            .where(users_table.c.id == internal_id)
            .values(
                status=status.value,
                modified_by=SYSTEM_USER,
                modified_at=datetime.now(timezone.utc),
                version=users_table.c.version + 1,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
