"""Per-user token schema and the readiness rules built on it."""

from __future__ import annotations

from reelnote.core.transcripts import Language, get_transcripts
from reelnote.schema.base import ORMModel


class UserTokens(ORMModel):
    """Tokens stored for a user; empty strings mean "not set"."""
    user_id: int
    imdb_token: str = ""
    notion_token: str = ""
    notion_database_id: str = ""

    def notion_token_is_good(self) -> bool:
        """Return True when the user can write to their Notion movie list."""
        return bool(self.notion_token) and bool(self.notion_database_id)

    def missing_notion_settings(self) -> list[str]:
        missing: list[str] = []
        if not self.notion_token:
            missing.append("notion_token")
        if not self.notion_database_id:
            missing.append("notion_database_id")
        return missing

    def user_hint(self, lang: Language) -> str:
        """List, one line each, the settings still needed before writing to Notion."""
        texts = get_transcripts(lang)
        hint_lines = {
            "notion_token": texts.user_hint_set_notion_token,
            "notion_database_id": texts.user_hint_create_notion_database,
        }
        hint_msg = f"{texts.user_hint_title}\n"
        for field in self.missing_notion_settings():
            hint_msg += "\n" + hint_lines[field]
        return hint_msg

    def summary(self, lang: Language) -> str:
        texts = get_transcripts(lang)
        return texts.tokens_summary(
            self.imdb_token or texts.not_set,
            self.notion_token or texts.not_set,
            self.notion_database_id or texts.not_set,
        )
