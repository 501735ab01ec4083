"""Base connector primitives for movie-metadata providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import httpx

from reelnote.core.transcripts import Language


@dataclass(slots=True)
class SearchResult:
    """One search hit; ``id`` is the provider's opaque identifier."""
    id: str
    title: str
    description: str = ""


@dataclass(slots=True)
class MovieInfo:
    """Provider-agnostic movie record written to the Notion movie list."""
    title: str
    imdb_link: str
    movie_type: str = ""
    year: int | None = None
    image: str = ""
    release_date: date | None = None
    runtime: int | None = None
    plot: str = ""
    director_list: list[str] = field(default_factory=list)
    star_list: list[str] = field(default_factory=list)
    genre_list: list[str] = field(default_factory=list)
    country_list: list[str] = field(default_factory=list)
    language_list: list[str] = field(default_factory=list)
    content_rating: str = ""
    imdb_rating: float | None = None


class MovieInfoProvider:
    """Abstract interface for anything that can search titles and fetch details."""
    source_name: str

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    def item_url(self, item_id: str) -> str:
        """Return the public page of an item."""
        raise NotImplementedError

    async def search(
        self, api_key: str, keyword: str, limit: int, lang: Language = Language.EN
    ) -> list[SearchResult]:
        """Return at most ``limit`` results for a keyword."""
        raise NotImplementedError

    async def fetch(self, api_key: str, item_id: str, lang: Language) -> MovieInfo:
        """Fetch a normalized record by provider identifier."""
        raise NotImplementedError
