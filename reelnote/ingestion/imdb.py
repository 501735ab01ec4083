from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from reelnote.core.errors import feedback_error, feedback_propagate_error
from reelnote.core.transcripts import Language, get_transcripts
from reelnote.ingestion.base import MovieInfo, MovieInfoProvider, SearchResult
from reelnote.utils.datetime import parse_date

logger = logging.getLogger("reelnote.ingestion.imdb")

IMDB_TITLE_BASE = "https://www.imdb.com/title"
SERVER_NAME = "IMDb-API"


class IdentityObj(BaseModel):
    id: str = ""
    name: str


class KeyValueObj(BaseModel):
    key: str = ""
    value: str


class ImdbApiMovieInfo(BaseModel):
    """Title payload as returned by IMDb-API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    title: str
    movie_type: str | None = Field(default=None, alias="type")
    year: str | None = None
    image: str | None = None
    release_date: str | None = Field(default=None, alias="releaseDate")
    runtime_mins: str | None = Field(default=None, alias="runtimeMins")
    plot: str | None = None
    director_list: list[IdentityObj] = Field(default_factory=list, alias="directorList")
    star_list: list[IdentityObj] = Field(default_factory=list, alias="starList")
    genre_list: list[KeyValueObj] = Field(default_factory=list, alias="genreList")
    country_list: list[KeyValueObj] = Field(default_factory=list, alias="countryList")
    language_list: list[KeyValueObj] = Field(default_factory=list, alias="languageList")
    content_rating: str | None = Field(default=None, alias="contentRating")
    imdb_rating: str | None = Field(default=None, alias="imDbRating")

    @field_validator(
        "director_list", "star_list", "genre_list", "country_list", "language_list", mode="before"
    )
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_movie_info(self) -> MovieInfo:
        return MovieInfo(
            title=self.title,
            imdb_link=f"{IMDB_TITLE_BASE}/{self.id}",
            movie_type=self.movie_type or "",
            year=_parse_int(self.year),
            image=self.image or "",
            release_date=parse_date(self.release_date),
            runtime=_parse_int(self.runtime_mins),
            plot=self.plot or "",
            director_list=[d.name for d in self.director_list],
            star_list=[s.name for s in self.star_list],
            genre_list=[g.value for g in self.genre_list],
            country_list=[c.value for c in self.country_list],
            language_list=[lang.value for lang in self.language_list],
            content_rating=self.content_rating or "",
            imdb_rating=_parse_float(self.imdb_rating),
        )


def _parse_int(value: str | None) -> int | None:
    if not value:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number if number >= 0 else None


def _parse_float(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None


def first_sentence(description: str) -> str:
    """Keep the description up to and including its first closing parenthesis."""
    end = description.find(")")
    return description if end < 0 else description[: end + 1]


class ImdbApiConnector(MovieInfoProvider):
    source_name = "imdb"

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        default_key: str,
        base_url: str = "https://imdb-api.com",
    ) -> None:
        super().__init__(client)
        self.default_key = default_key
        self.base_url = base_url.rstrip("/")

    def api_key_or_default(self, api_key: str) -> str:
        return api_key or self.default_key

    def search_api(self, api_key: str, title: str) -> str:
        return f"{self.base_url}/API/SearchTitle/{self.api_key_or_default(api_key)}/{quote(title, safe='')}"

    def title_info_api(self, api_key: str, item_id: str, lang: Language) -> str:
        return f"{self.base_url}/{lang.value}/API/Title/{self.api_key_or_default(api_key)}/{quote(item_id, safe='')}"

    def item_url(self, item_id: str) -> str:
        return f"{IMDB_TITLE_BASE}/{item_id}"

    async def search(
        self, api_key: str, keyword: str, limit: int, lang: Language = Language.EN
    ) -> list[SearchResult]:
        data = await self._request(self.search_api(api_key, keyword), "search", lang)
        results = data.get("results")
        if not isinstance(results, list):
            return []
        search_results: list[SearchResult] = []
        for raw in results[:limit]:
            if not isinstance(raw, dict):
                continue
            item_id, title = raw.get("id"), raw.get("title")
            if not isinstance(item_id, str) or not isinstance(title, str):
                continue
            description = raw.get("description")
            search_results.append(
                SearchResult(
                    id=item_id,
                    title=title,
                    description=first_sentence(description) if isinstance(description, str) else "",
                )
            )
        return search_results

    async def fetch(self, api_key: str, item_id: str, lang: Language) -> MovieInfo:
        data = await self._request(self.title_info_api(api_key, item_id, lang), "fetch title", lang)
        try:
            payload = ImdbApiMovieInfo.model_validate(data)
        except ValidationError as exc:
            raise feedback_propagate_error(
                get_transcripts(lang).parse_imdb_api_response_failed,
                exc,
                operation="parse title",
                service=SERVER_NAME,
            ) from exc
        return payload.to_movie_info()

    async def _request(self, url: str, operation: str, lang: Language) -> dict[str, Any]:
        """GET an IMDb-API endpoint and surface its ``errorMessage`` as user feedback."""
        texts = get_transcripts(lang)
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as exc:
            raise feedback_propagate_error(
                texts.cannot_reach_server(SERVER_NAME), exc, operation=operation, service=SERVER_NAME
            ) from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise feedback_propagate_error(
                texts.parse_imdb_api_error_message_failed, exc, operation=operation, service=SERVER_NAME
            ) from exc
        if not isinstance(data, dict):
            return {}
        error_message = data.get("errorMessage")
        if isinstance(error_message, str) and error_message:
            logger.info("IMDb-API %s rejected: %s", operation, error_message)
            raise feedback_error(error_message)
        return data


