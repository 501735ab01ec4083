"""Shared pytest fixtures for bot tests and database isolation."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from reelnote.bot.handlers import BotDependencies
from reelnote.core.config import Settings
from reelnote.db.base import Base
from reelnote.services.credential_store import CredentialStore
from reelnote.tests.utils import FakeMovieApi, FakeNotionClient, RecordingMessenger

BOT_TOKEN = "123456:TEST-token_abc"


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        tg_bot_token=BOT_TOKEN,
        database_url="sqlite+aiosqlite:///:memory:",
        host="bot.example.com",
        port=8443,
        default_imdb_api_key="default-key",
        register_webhook=False,
    )


@pytest_asyncio.fixture()
async def sessionmaker(settings: Settings, tmp_path) -> async_sessionmaker[AsyncSession]:
    database_url = settings.test_database_url or f"sqlite+aiosqlite:///{tmp_path / 'reelnote.db'}"
    url = make_url(database_url)
    schema_name: str | None = None
    engine = create_async_engine(database_url, future=True)
    if url.drivername.startswith("postgresql"):
        # Isolate each test run in its own schema for parallel-friendly cleanup.
        schema_name = f"test_{uuid.uuid4().hex}"
        engine = engine.execution_options(schema_translate_map={None: schema_name})
    async with engine.begin() as conn:
        if schema_name:
            await conn.exec_driver_sql(f'CREATE SCHEMA IF NOT EXISTS "{schema_name}"')
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    finally:
        async with engine.begin() as conn:
            if schema_name:
                await conn.exec_driver_sql(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE')
            else:
                await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture()
def credential_store(sessionmaker) -> CredentialStore:
    return CredentialStore(sessionmaker)


@pytest.fixture()
def messenger() -> RecordingMessenger:
    return RecordingMessenger()


@pytest.fixture()
def movie_api() -> FakeMovieApi:
    return FakeMovieApi()


@pytest.fixture()
def notion() -> FakeNotionClient:
    return FakeNotionClient()


@pytest.fixture()
def deps(messenger, credential_store, movie_api, notion) -> BotDependencies:
    return BotDependencies(
        messenger=messenger,
        credentials=credential_store,
        movie_api=movie_api,
        notion=notion,
        help_page="https://www.notion.so/help-page",
    )
