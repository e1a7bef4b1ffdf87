"""create users and ratings

Revision ID: 3c1f2a9d7b10
Revises:
Create Date: 2026-10-17 09:12:40.512304

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c1f2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users and ratings tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("song_id", sa.String(length=255), nullable=False),
        sa.Column("identity", sa.String(length=500), nullable=False),
        sa.Column(
            "source_address",
            sa.String(length=45).with_variant(postgresql.INET(), "postgresql"),
            nullable=True,
        ),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("value IN (1, -1)", name="ck_ratings_value"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("song_id", "identity", name="uq_ratings_song_identity"),
    )
    op.create_index("ix_ratings_song_id", "ratings", ["song_id"])
    op.create_index("ix_ratings_identity", "ratings", ["identity"])
    op.create_index("ix_ratings_created_at", "ratings", ["created_at"])


def downgrade() -> None:
    """Drop the users and ratings tables."""
    op.drop_index("ix_ratings_created_at", table_name="ratings")
    op.drop_index("ix_ratings_identity", table_name="ratings")
    op.drop_index("ix_ratings_song_id", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
