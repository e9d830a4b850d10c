"""Create users and pastes tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema: `users` (accounts) and `pastes` (shared text).
How:   Portable column types so the same revision runs on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables with their constraints and indexes."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "email",
            sa.String(255),
            nullable=False,
            comment="Login key, unique and case-sensitive",
        ),
        sa.Column(
            "password_hash",
            sa.String(255),
            nullable=False,
            comment="Salted one-way hash of the user's password",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        # Concurrent signups for one email: exactly one INSERT survives this
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "pastes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "uuid",
            sa.String(36),
            nullable=False,
            comment="Public, unguessable identifier used in share URLs",
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "user_id",
            sa.Integer(),
            nullable=True,
            comment="Owner; NULL for anonymous pastes",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("uuid"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
    )

    # "My pastes, newest first"
    op.create_index(
        "idx_pastes_user_id_created_at",
        "pastes",
        ["user_id", "created_at"],
    )


def downgrade() -> None:
    """Drop both tables. Destructive."""
    op.drop_index("idx_pastes_user_id_created_at", table_name="pastes")
    op.drop_table("pastes")
    op.drop_table("users")
