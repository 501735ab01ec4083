"""Widen user token columns to text

Revision ID: 20240615_000002
Revises: 20240601_000001
Create Date: 2024-06-15 00:00:02
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20240615_000002"
down_revision: Union[str, None] = "20240601_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TOKEN_COLUMNS = ("imdb_token", "notion_token", "notion_database_id")


def upgrade() -> None:
    """Store tokens of any length."""
    for column in TOKEN_COLUMNS:
        op.alter_column(
            "user_tokens",
            column,
            existing_type=sa.String(length=255),
            type_=sa.Text(),
            existing_nullable=False,
            existing_server_default="",
        )


def downgrade() -> None:
    """Restore the 255 character limit."""
    for column in TOKEN_COLUMNS:
        op.alter_column(
            "user_tokens",
            column,
            existing_type=sa.Text(),
            type_=sa.String(length=255),
            existing_nullable=False,
            existing_server_default="",
        )
