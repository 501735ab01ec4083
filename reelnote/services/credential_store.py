"""Service for storing per-user IMDb and Notion tokens."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute

from reelnote.core.errors import WorkError, feedback_error, feedback_propagate_error
from reelnote.core.transcripts import Language, get_transcripts
from reelnote.models.credential import UserTokenRecord
from reelnote.schema.credentials import UserTokens

logger = logging.getLogger("reelnote.services.credential_store")


def _database_failure(exc: SQLAlchemyError, operation: str, lang: Language) -> WorkError:
    return feedback_propagate_error(
        get_transcripts(lang).database_error, exc, operation=operation, service="database"
    )


class CredentialStore:
    """Read and update the ``user_tokens`` table; one session per call."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def init_user_tokens(self, user_id: int, lang: Language = Language.EN) -> None:
        """Insert an empty row for a user."""
        try:
            async with self._sessionmaker() as session:
                session.add(UserTokenRecord(user_id=user_id, imdb_token="", notion_token="", notion_database_id=""))
                await session.commit()
        except SQLAlchemyError as exc:
            raise _database_failure(exc, "insert default user tokens", lang) from exc

    async def ensure_user_tokens(self, user_id: int, lang: Language = Language.EN) -> bool:
        """Create the user's row when absent; return True when a row was created."""
        if await self.get_user_tokens(user_id, lang) is not None:
            return False
        try:
            await self.init_user_tokens(user_id, lang)
        except WorkError as exc:
            # A concurrent /start from the same user already inserted the row.
            if isinstance(exc.cause, IntegrityError):
                logger.info("User tokens for %s created concurrently", user_id)
                return False
            raise
        logger.info("Initialized tokens for user %s", user_id)
        return True

    async def get_user_tokens(self, user_id: int, lang: Language = Language.EN) -> UserTokens | None:
        try:
            async with self._sessionmaker() as session:
                record = await session.scalar(select(UserTokenRecord).where(UserTokenRecord.user_id == user_id))
        except SQLAlchemyError as exc:
            raise _database_failure(exc, "select user tokens", lang) from exc
        if record is None:
            return None
        return UserTokens.model_validate(record)

    async def user_tokens(self, user_id: int, lang: Language = Language.EN) -> UserTokens:
        """Return the user's tokens or ask the user to /start again."""
        tokens = await self.get_user_tokens(user_id, lang)
        if tokens is None:
            raise feedback_error(get_transcripts(lang).configure_again)
        return tokens

    async def get_imdb_token(self, user_id: int, lang: Language = Language.EN) -> str | None:
        return await self._select_column(UserTokenRecord.imdb_token, user_id, lang)

    async def imdb_token(self, user_id: int, lang: Language = Language.EN) -> str:
        token = await self.get_imdb_token(user_id, lang)
        if token is None:
            raise feedback_error(get_transcripts(lang).configure_again)
        return token

    async def get_notion_integration_token(self, user_id: int, lang: Language = Language.EN) -> str | None:
        return await self._select_column(UserTokenRecord.notion_token, user_id, lang)

    async def notion_integration_token(self, user_id: int, lang: Language = Language.EN) -> str:
        token = await self.get_notion_integration_token(user_id, lang)
        if token is None:
            raise feedback_error(get_transcripts(lang).configure_again)
        return token

    async def store_imdb_token(self, user_id: int, token: str, lang: Language = Language.EN) -> bool:
        return await self._update_column("imdb_token", user_id, token, lang)

    async def store_notion_token(self, user_id: int, token: str, lang: Language = Language.EN) -> bool:
        return await self._update_column("notion_token", user_id, token, lang)

    async def store_notion_database_id(self, user_id: int, database_id: str, lang: Language = Language.EN) -> bool:
        return await self._update_column("notion_database_id", user_id, database_id, lang)

    async def remove_user_tokens(self, user_id: int, lang: Language = Language.EN) -> bool:
        """Delete the user's row; return True when a row was removed."""
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(delete(UserTokenRecord).where(UserTokenRecord.user_id == user_id))
                await session.commit()
        except SQLAlchemyError as exc:
            raise _database_failure(exc, "delete user tokens", lang) from exc
        return result.rowcount > 0

    async def reset_user_tokens(self, user_id: int, lang: Language = Language.EN) -> None:
        """Drop every stored token by recreating the row empty in one transaction."""
        try:
            async with self._sessionmaker() as session:
                async with session.begin():
                    await session.execute(delete(UserTokenRecord).where(UserTokenRecord.user_id == user_id))
                    session.add(
                        UserTokenRecord(user_id=user_id, imdb_token="", notion_token="", notion_database_id="")
                    )
        except SQLAlchemyError as exc:
            raise _database_failure(exc, "reset user tokens", lang) from exc
        logger.info("Reset tokens for user %s", user_id)

    async def _select_column(
        self, column: InstrumentedAttribute[str], user_id: int, lang: Language
    ) -> str | None:
        try:
            async with self._sessionmaker() as session:
                return await session.scalar(select(column).where(UserTokenRecord.user_id == user_id))
        except SQLAlchemyError as exc:
            raise _database_failure(exc, f"select {column.key}", lang) from exc

    async def _update_column(self, column: str, user_id: int, value: str, lang: Language) -> bool:
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(
                    update(UserTokenRecord).where(UserTokenRecord.user_id == user_id).values({column: value})
                )
                await session.commit()
        except SQLAlchemyError as exc:
            raise _database_failure(exc, f"update {column}", lang) from exc
        return result.rowcount > 0
