"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from chatauth.domain.model import UserAccount
from chatauth.domain.value import (
    AuthProvider,
    ExternalId,
    InternalId,
    OnlineStatus,
    Username,
)


def row_to_user(row: Dict[str, Any]) -> UserAccount:
    """Convert database row to UserAccount domain model.

    Args:
        row: Database row as dict

    Returns:
        UserAccount domain model
    """
    external_id = row["external_id"]
    return UserAccount(
        internal_id=InternalId(row["id"]),
        external_id=ExternalId(
            UUID(external_id) if isinstance(external_id, str) else external_id
        ),
        email=row["email"],
        username=Username(row["username"]),
        password_hash=row["password_hash"],
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        avatar_url=row.get("avatar_url"),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row.get("provider_user_id"),
        email_verified=row["email_verified"],
        enabled=row["enabled"],
        status=OnlineStatus(row["status"]),
        created_by=row["created_by"],
        created_at=row["created_at"],
        modified_by=row["modified_by"],
        modified_at=row["modified_at"],
        version=row["version"],
    )


def user_to_dict(account: UserAccount) -> Dict[str, Any]:
    """Convert UserAccount domain model to database dict.

    The internal id is left out: it is assigned by the database.

    Args:
        account: UserAccount domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = account.model_dump(exclude={"internal_id"})
    data["username"] = account.username.root
    data["provider"] = account.provider.value
    data["status"] = account.status.value
    return data
