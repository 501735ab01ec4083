"""Notion database creation, movie page inserts, and page reference parsing."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, ValidationError

from reelnote.core.errors import WorkError, feedback_error, feedback_propagate_error
from reelnote.core.transcripts import Language, get_transcripts
from reelnote.ingestion.base import MovieInfo
from reelnote.services.notion_objects import build_page_payload, create_database_body

logger = logging.getLogger("reelnote.services.notion")

SERVER_NAME = "Notion"
DEFAULT_WORKSPACE_DOMAIN = "notion.so"


class DatabaseObj(BaseModel):
    id: str


class NotionErrorObj(BaseModel):
    object: str = "error"
    status: int
    code: str
    message: str


def get_notion_page_id(value: str, workspace_domain: str = DEFAULT_WORKSPACE_DOMAIN) -> str | None:
    """Extract a page id from a Notion link, or accept a bare id.

    Invariants:
    - Anything that is not an absolute URL is returned unchanged.
    - Absolute URLs outside the workspace domain never match.
    """
    try:
        parsed = urlparse(value)
        domain = parsed.hostname
    except ValueError:
        return value
    if not parsed.scheme:
        return value
    if not domain or not (domain == workspace_domain or domain.endswith(f".{workspace_domain}")):
        return None
    last_segment = parsed.path.rsplit("/", 1)[-1]
    return last_segment.split("-")[-1] or None


def parse_notion_page_id(
    value: str, lang: Language, workspace_domain: str = DEFAULT_WORKSPACE_DOMAIN
) -> str:
    page_id = get_notion_page_id(value, workspace_domain)
    if page_id is None:
        raise feedback_error(get_transcripts(lang).invalid_notion_page_url)
    return page_id


class NotionClient:
    """Thin wrapper over the Notion REST API using a user's integration token."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str = "https://api.notion.com/v1",
        version: str = "2022-06-28",
    ) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.version = version

    async def create_database(self, token: str, page_id: str, lang: Language) -> str:
        """Create the movie-list database under a page and return its id."""
        response = await self._post("/databases", token, create_database_body(page_id), "create database", lang)
        if not response.is_success:
            raise await self._error_from_response(response, "create database", lang)
        try:
            database = DatabaseObj.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise feedback_propagate_error(
                get_transcripts(lang).parse_notion_response_failed,
                exc,
                operation="create database",
                service=SERVER_NAME,
            ) from exc
        logger.info("Created Notion database %s under page %s", database.id, page_id)
        return database.id

    async def insert_movie_info(self, token: str, database_id: str, movie_info: MovieInfo, lang: Language) -> None:
        """Add a movie as a new page of the user's movie-list database."""
        body = build_page_payload(database_id, movie_info)
        response = await self._post("/pages", token, body, "insert movie page", lang)
        if not response.is_success:
            raise await self._error_from_response(response, "insert movie page", lang)

    async def _post(
        self, path: str, token: str, body: dict[str, Any], operation: str, lang: Language
    ) -> httpx.Response:
        try:
            return await self.client.post(
                f"{self.base_url}{path}",
                headers={"Notion-Version": self.version, "Authorization": f"Bearer {token}"},
                json=body,
            )
        except httpx.HTTPError as exc:
            raise feedback_propagate_error(
                get_transcripts(lang).cannot_reach_server(SERVER_NAME),
                exc,
                operation=operation,
                service=SERVER_NAME,
            ) from exc

    async def _error_from_response(self, response: httpx.Response, operation: str, lang: Language) -> WorkError:
        """Turn a Notion error body into user feedback carrying Notion's own message."""
        try:
            error = NotionErrorObj.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            return feedback_propagate_error(
                get_transcripts(lang).parse_notion_error_message_failed,
                exc,
                operation=operation,
                service=SERVER_NAME,
            )
        logger.info("Notion %s rejected (%s %s): %s", operation, error.status, error.code, error.message)
        return feedback_error(error.message)
