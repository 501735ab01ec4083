"""FastAPI application entrypoint wiring the bot to its collaborators."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from reelnote.api.router import api_router
from reelnote.bot.dispatch import BotDispatcher
from reelnote.bot.handlers import BotDependencies
from reelnote.core.config import Settings, get_settings
from reelnote.db.session import create_engine, create_sessionmaker
from reelnote.ingestion import get_connector
from reelnote.ingestion.http import build_http_client
from reelnote.services.credential_store import CredentialStore
from reelnote.services.notion_service import NotionClient
from reelnote.services.telegram_service import TelegramClient

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; collaborators are created in the lifespan and kept on ``app.state``."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        logger = logging.getLogger("reelnote.main")
        engine = create_engine(settings.database_url)
        http_client = build_http_client(settings.http_timeout_seconds)
        telegram = TelegramClient(http_client, bot_token=settings.tg_bot_token, base_url=settings.telegram_api_url)
        deps = BotDependencies(
            messenger=telegram,
            credentials=CredentialStore(create_sessionmaker(engine)),
            movie_api=get_connector("imdb", client=http_client, settings=settings),
            notion=NotionClient(http_client, base_url=settings.notion_api_url, version=settings.notion_version),
            help_page=settings.help_page,
            notion_workspace_domain=settings.notion_workspace_domain,
        )
        app.state.dispatcher = BotDispatcher(deps)
        try:
            if settings.register_webhook:
                await telegram.set_webhook(settings.webhook_url)
            logger.info("%s ready on port %s", settings.app_name, settings.port)
            yield
        finally:
            app.state.dispatcher = None
            await http_client.aclose()
            await engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.dispatcher = None
    app.include_router(api_router)
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
