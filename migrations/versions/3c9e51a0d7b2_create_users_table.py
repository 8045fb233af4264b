"""create_users_table

Create the user directory for chat authentication:
- Users (one row per person, bound to at most one social provider identity)

Revision ID: 3c9e51a0d7b2
Revises:
Create Date: 2026-10-17 09:12:44.318201

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c9e51a0d7b2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("external_id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.String(500), nullable=True),
        sa.Column("provider", sa.String(50), nullable=False),  # 'google', 'facebook'
        sa.Column("provider_user_id", sa.String(255), nullable=True),
        sa.Column(
            "email_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "status", sa.String(50), nullable=False, server_default="offline"
        ),
        sa.Column("created_by", sa.String(128), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("modified_by", sa.String(128), nullable=False),
        sa.Column(
            "modified_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_id", name="uq_users_external_id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint(
            "provider", "provider_user_id", name="uq_users_provider_identity"
        ),
        sa.CheckConstraint(
            "provider IN ('local', 'google', 'facebook')", name="ck_users_provider"
        ),
        sa.CheckConstraint(
            "status IN ('online', 'offline', 'away', 'busy')", name="ck_users_status"
        ),
    )
    op.create_index(
        "idx_users_status_enabled",
        "users",
        ["status"],
        postgresql_where=sa.text("enabled = true"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_users_status_enabled", table_name="users")
    op.drop_table("users")
