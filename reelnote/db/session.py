"""Async engine and session factory for the credential database."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine used by the credential store."""
    options: dict = {"future": True}
    if database_url.startswith("postgresql"):
        options.update(pool_size=5, max_overflow=0, pool_pre_ping=True)
    return create_async_engine(database_url, **options)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
