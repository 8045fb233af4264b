"""SQLAlchemy table definitions for chat user accounts.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, Identity(), primary_key=True),  # Internal, never exposed
    Column("external_id", UUID(as_uuid=True), nullable=False),
    Column("email", String(255), nullable=False),
    Column("username", String(255), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("first_name", String(255), nullable=True),
    Column("last_name", String(255), nullable=True),
    Column("avatar_url", String(500), nullable=True),
    Column("provider", String(50), nullable=False),
    Column("provider_user_id", String(255), nullable=True),  # Google 'sub', Facebook 'id'
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column("enabled", Boolean, nullable=False, server_default="true"),
    Column("status", String(50), nullable=False, server_default="offline"),
    Column("created_by", String(128), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("modified_by", String(128), nullable=False),
    Column(
        "modified_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("version", Integer, nullable=False, server_default="0"),
    UniqueConstraint("external_id", name="uq_users_external_id"),
    UniqueConstraint("email", name="uq_users_email"),
    UniqueConstraint("username", name="uq_users_username"),
    UniqueConstraint("provider", "provider_user_id", name="uq_users_provider_identity"),
    CheckConstraint(
        "provider IN ('local', 'google', 'facebook')", name="ck_users_provider"
    ),
    CheckConstraint(
        "status IN ('online', 'offline', 'away', 'busy')", name="ck_users_status"
    ),
)

Index(
    "idx_users_status_enabled",
    users_table.c.status,
    postgresql_where=users_table.c.enabled.is_(True),
)

# Constraint name -> account field, for translating integrity errors
UNIQUE_CONSTRAINT_FIELDS = {
    "uq_users_external_id": "external_id",
    "uq_users_email": "email",
    "uq_users_username": "username",
    "uq_users_provider_identity": "provider_user_id",
}
