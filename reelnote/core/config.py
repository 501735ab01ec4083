"""Application settings parsed from environment variables and defaults."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HELP_PAGE = "https://www.notion.so/octocat/ca61deb6472a4c73b9b43b0ecd549397"


class Settings(BaseSettings):
    """Bot configuration loaded from environment variables."""

    app_name: str = "ReelNote Bot"

    tg_bot_token: str
    database_url: str
    test_database_url: Optional[str] = None

    host: str
    port: int
    default_imdb_api_key: str
    help_page: str = DEFAULT_HELP_PAGE

    log_level: str = "INFO"
    imdb_api_url: str = "https://imdb-api.com"
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_workspace_domain: str = "notion.so"
    telegram_api_url: str = "https://api.telegram.org"
    register_webhook: bool = True
    http_timeout_seconds: float = 15.0

    @field_validator("database_url", "test_database_url", mode="before")
    @classmethod
    def _use_async_driver(cls, value: str | None) -> str | None:
        """Point plain PostgreSQL URLs at the asyncpg driver."""
        if not isinstance(value, str):
            return value
        stripped = value.strip()
        for prefix in ("postgres://", "postgresql://"):
            if stripped.startswith(prefix):
                return "postgresql+asyncpg://" + stripped[len(prefix):]
        return stripped

    @field_validator("help_page", mode="before")
    @classmethod
    def _default_help_page(cls, value: str | None) -> str:
        if not value or not str(value).strip():
            return DEFAULT_HELP_PAGE
        return str(value).strip()

    @property
    def webhook_path(self) -> str:
        return f"/webhooks/{self.tg_bot_token}"

    @property
    def webhook_url(self) -> str:
        return f"https://{self.host}{self.webhook_path}"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()
