"""create users and notes

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-19 09:12:41.512003

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

from notekeeper.core.models.types import GUID, StringListType

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("roles", StringListType(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("username"),
        sa.CheckConstraint("length(username) <= 50", name="ck_users_username_len"),
    )
    op.create_table(
        "notes",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("user_id", GUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("title", name="uq_notes_title"),
    )
    op.create_index("idx_notes_user_id", "notes", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_notes_user_id", table_name="notes")
    op.drop_table("notes")
    op.drop_table("users")
