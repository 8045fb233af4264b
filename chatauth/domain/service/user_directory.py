"""User directory domain service.

Resolves a normalized identity to a local account: by provider identity,
then by email (cross-provider linking), then by creating a new account.
"""

import re
import uuid

import logfire

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
    NormalizedIdentity,
    OnlineStatus,
    Username,
)

from .base import Clock, Service, utc_now

MAX_RESOLVE_ATTEMPTS = 3
MAX_USERNAME_LENGTH = 255
FALLBACK_USERNAME = "user"


def slugify_username(value: str | None) -> str:
    """Lowercase, replace non-alphanumerics with `_`, collapse and strip."""
    if not value:
        return ""
    slug = re.sub(r"[^a-z0-9]+", "_", value.lower())
    return slug.strip("_")


def base_username(display_name: str | None, email: str) -> str:
    """Username stem for an identity before collision handling.

    Falls back to the email local part, then to "user".
    """
    base = slugify_username(display_name)
    if not base:
        base = slugify_username(email.split("@", 1)[0])
    if not base:
        base = FALLBACK_USERNAME
    # Leave room for a collision suffix
    return base[: MAX_USERNAME_LENGTH - 12].rstrip("_")


def split_name(display_name: str | None) -> tuple[str | None, str | None]:
    """Split a display name into first name and the remaining words."""
    if not display_name or not display_name.strip():
        return None, None
    parts = display_name.split()
    first = parts[0]
    last = " ".join(parts[1:]) or None
    return first, last


def _display_name_of(account: UserAccount) -> str | None:
    parts = [p for p in (account.first_name, account.last_name) if p]
    return " ".join(parts) or None


def _same_display_name(account: UserAccount, display_name: str | None) -> bool:
    new = " ".join(display_name.split()) if display_name else None
    return (new or None) == _display_name_of(account)


class UserDirectory(Service):
    """Lookup, creation and linking of local user accounts."""

    def __init__(self, user_repository: UserRepository, clock: Clock = utc_now) -> None:
        """Initialize user directory.

        Args:
            user_repository: User account repository
            clock: Source of the current time for audit columns
        """
        self.user_repository = user_repository
        self.clock = clock

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> UserAccount | None:
        """Find an account by provider identity."""
        return await self.user_repository.find_by_provider_identity(
            provider, provider_user_id
        )

    async def find_by_email(self, email: str) -> UserAccount | None:
        """Find an account by email."""
        return await self.user_repository.find_by_email(email)

    async def find_by_external_id(self, external_id: ExternalId) -> UserAccount | None:
        """Find an account by its public identifier."""
        return await self.user_repository.find_by_external_id(external_id)

    async def get_by_external_id(self, external_id: ExternalId) -> UserAccount:
        """Get an account by its public identifier.

        Raises:
            NotFoundError: If no account has that identifier
        """
        with logfire.span(
            "user_directory.get_by_external_id", external_id=str(external_id)
        ):
            account = await self.user_repository.find_by_external_id(external_id)
            if account is None:
                logfire.warn("User not found", external_id=str(external_id))
                raise NotFoundError("User", str(external_id))
            return account

    async def create_from_identity(
        self, identity: NormalizedIdentity, provider: AuthProvider
    ) -> UserAccount:
        """Create a new account for a first-time identity.

        Args:
            identity: Normalized identity
            provider: Provider the identity came from

        Returns:
            The stored account

        Raises:
            DuplicateAccountError: If a concurrent login created it first
        """
        with logfire.span(
            "user_directory.create_from_identity",
            provider=provider.value,
            provider_user_id=identity.provider_user_id,
        ):
            first_name, last_name = split_name(identity.display_name)
            username = await self._unique_username(
                base_username(identity.display_name, identity.email)
            )
            now = self.clock()

            account = UserAccount(
                external_id=ExternalId(uuid.uuid4()),
                email=identity.email,
                username=username,
                first_name=first_name,
                last_name=last_name,
                avatar_url=identity.avatar_url,
                provider=provider,
                provider_user_id=identity.provider_user_id,
                email_verified=True,
                enabled=True,
                status=OnlineStatus.OFFLINE,
                created_by=SYSTEM_USER,
                created_at=now,
                modified_by=SYSTEM_USER,
                modified_at=now,
            )
            created = await self.user_repository.create(account)
            logfire.info(
                "User account created",
                external_id=str(created.external_id),
                username=created.username.root,
                provider=provider.value,
            )
            return created

    async def link_or_update(
        self,
        existing: UserAccount,
        identity: NormalizedIdentity,
        provider: AuthProvider,
    ) -> UserAccount:
        """Refresh an existing account from a new login.

        A login through a different provider (matched by email) also binds
        that provider to the account.

        Args:
            existing: Account found by provider identity or email
            identity: Normalized identity from this login
            provider: Provider the identity came from

        Returns:
            The updated account

        Raises:
            ConcurrentModificationError: If the account changed since it was read
        """
        linking = existing.provider != provider
        with logfire.span(
            "user_directory.link_or_update",
            external_id=str(existing.external_id),
            provider=provider.value,
            linking=linking,
        ):
            changes: dict[str, object] = {
                "avatar_url": identity.avatar_url or existing.avatar_url,
                "modified_by": SYSTEM_USER,
                "modified_at": self.clock(),
            }

            if not _same_display_name(existing, identity.display_name):
                first_name, last_name = split_name(identity.display_name)
                changes["first_name"] = first_name
                changes["last_name"] = last_name
                changes["username"] = await self._unique_username(
                    base_username(identity.display_name, existing.email),
                    current=existing.username,
                )

            if linking:
                changes["provider"] = provider
                changes["provider_user_id"] = identity.provider_user_id
                changes["email_verified"] = True

            updated = await self.user_repository.update(
                existing.model_copy(update=changes)
            )
            if linking:
                logfire.info(
                    "Provider linked to existing account",
                    external_id=str(updated.external_id),
                    previous_provider=existing.provider.value,
                    provider=provider.value,
                )
            else:
                logfire.info(
                    "User account updated", external_id=str(updated.external_id)
                )
            return updated

    async def set_online_status(
        self, internal_id: InternalId, status: OnlineStatus
    ) -> None:
        """Set an account's online status."""
        with logfire.span(
            "user_directory.set_online_status",
            internal_id=internal_id,
            status=status.value,
        ):
            await self.user_repository.update_status(internal_id, status)

    async def resolve(self, identity: NormalizedIdentity) -> UserAccount:
        """Resolve an identity to an account, creating or linking as needed.

        A uniqueness or version conflict means a concurrent login got there
        first, so the lookup sequence is re-run against the stored state.

        Args:
            identity: Normalized identity

        Returns:
            The resolved account

        Raises:
            DuplicateAccountError: If the conflict persists after retries
            ConcurrentModificationError: If the conflict persists after retries
        """
        with logfire.span(
            "user_directory.resolve",
            provider=identity.provider.value,
            provider_user_id=identity.provider_user_id,
        ):
            attempt = 1
            while True:
                try:
                    return await self._resolve_once(identity)
                except (DuplicateAccountError, ConcurrentModificationError) as e:
                    if attempt >= MAX_RESOLVE_ATTEMPTS:
                        logfire.error(
                            "Account resolution failed after retries",
                            attempts=attempt,
                            error=str(e),
                        )
                        raise
                    logfire.warn(
                        "Account write conflict, retrying lookup",
                        attempt=attempt,
                        error=str(e),
                    )
                    attempt += 1

    async def _resolve_once(self, identity: NormalizedIdentity) -> UserAccount:
        provider = identity.provider

        account = await self.user_repository.find_by_provider_identity(
            provider, identity.provider_user_id
        )
        if account is not None:
            return await self.link_or_update(account, identity, provider)

        account = await self.user_repository.find_by_email(identity.email)
        if account is not None:
            return await self.link_or_update(account, identity, provider)

        return await self.create_from_identity(identity, provider)

    async def _unique_username(
        self, base: str, current: Username | None = None
    ) -> Username:
        # An account keeps its own username if it already fits the stem
        if current is not None and re.fullmatch(
            rf"{re.escape(base)}(?:_\d+)?", current.root
        ):
            return current

        candidate = Username(base)
        counter = 1
        while await self.user_repository.exists_by_username(candidate):
            candidate = Username(f"{base}_{counter}")
            counter += 1
        return candidate
