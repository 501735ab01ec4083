"""Connector registry for movie-metadata providers."""

from __future__ import annotations

import httpx

from reelnote.core.config import Settings
from reelnote.ingestion.base import MovieInfo, MovieInfoProvider, SearchResult
from reelnote.ingestion.imdb import ImdbApiConnector

__all__ = ["MovieInfo", "MovieInfoProvider", "SearchResult", "ImdbApiConnector", "get_connector"]


def get_connector(source: str, *, client: httpx.AsyncClient, settings: Settings) -> MovieInfoProvider:
    """Return a connector instance for the given source name."""
    key = source.lower()
    if key == "imdb":
        return ImdbApiConnector(
            client,
            default_key=settings.default_imdb_api_key,
            base_url=settings.imdb_api_url,
        )
    raise ValueError(f"Unsupported source {source}")
