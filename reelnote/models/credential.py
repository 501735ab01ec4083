from __future__ import annotations

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from reelnote.db.base_class import Base


class UserTokenRecord(Base):
    """One row of tokens per Telegram user; empty strings mean "not set"."""

    __tablename__ = "user_tokens"

    user_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    imdb_token: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notion_token: Mapped[str] = mapped_column(Text, nullable=False, default="")
    notion_database_id: Mapped[str] = mapped_column(Text, nullable=False, default="")
