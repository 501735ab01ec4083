"""Shared fakes for bot tests."""

from __future__ import annotations

from dataclasses import dataclass, field

from reelnote.core.transcripts import Language
from reelnote.ingestion.base import MovieInfo, MovieInfoProvider, SearchResult
from reelnote.ingestion.http import ExternalAPIError
from reelnote.services.telegram_service import InlineButton


@dataclass(slots=True)
class SentMessage:
    chat_id: int
    text: str
    parse_mode: str | None = None
    buttons: list[InlineButton] | None = None


class RecordingMessenger:
    """Messenger that keeps every outbound message in memory."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[SentMessage] = []
        self.fail = fail

    async def send_message(self, chat_id, text, *, parse_mode=None, buttons=None) -> None:
        if self.fail:
            raise ExternalAPIError("Telegram sendMessage rejected: Forbidden: bot was blocked by the user")
        self.sent.append(SentMessage(chat_id=chat_id, text=text, parse_mode=parse_mode, buttons=buttons))

    @property
    def texts(self) -> list[str]:
        return [message.text for message in self.sent]


class FakeMovieApi(MovieInfoProvider):
    """Provider returning canned results and recording the keys it was called with."""
    source_name = "fake"

    def __init__(self, results: list[SearchResult] | None = None, movie: MovieInfo | None = None) -> None:
        self.results = results or []
        self.movie = movie or MovieInfo(title="Inception", imdb_link="https://www.imdb.com/title/tt1375666")
        self.search_calls: list[tuple[str, str, int]] = []
        self.fetch_calls: list[tuple[str, str]] = []

    def item_url(self, item_id: str) -> str:
        return f"https://movies.example.com/{item_id}"

    async def search(self, api_key: str, keyword: str, limit: int, lang: Language = Language.EN) -> list[SearchResult]:
        self.search_calls.append((api_key, keyword, limit))
        return self.results[:limit]

    async def fetch(self, api_key: str, item_id: str, lang: Language) -> MovieInfo:
        self.fetch_calls.append((api_key, item_id))
        return self.movie


@dataclass
class FakeNotionClient:
    database_id: str = "db-123"
    created: list[tuple[str, str]] = field(default_factory=list)
    inserted: list[tuple[str, str, MovieInfo]] = field(default_factory=list)

    async def create_database(self, token: str, page_id: str, lang: Language) -> str:
        self.created.append((token, page_id))
        return self.database_id

    async def insert_movie_info(self, token: str, database_id: str, movie_info: MovieInfo, lang: Language) -> None:
        self.inserted.append((token, database_id, movie_info))
