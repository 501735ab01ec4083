"""Create user tokens table

Revision ID: 20240601_000001
Revises:
Create Date: 2024-06-01 00:00:01
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240601_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the per-user token table."""
    op.create_table(
        "user_tokens",
        sa.Column("user_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("imdb_token", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("notion_token", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("notion_database_id", sa.String(length=255), nullable=False, server_default=""),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Drop the per-user token table."""
    op.drop_table("user_tokens")
