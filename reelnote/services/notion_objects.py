"""Notion request bodies: the movie-list schema and movie page properties."""

from __future__ import annotations

from datetime import date
from typing import Any

from reelnote.ingestion.base import MovieInfo

MOVIE_LIST_TITLE = "Movie List"
MOVIE_LIST_ICON = "🎬"

MULTI_SELECT_COLUMNS = ("Director", "Star", "Genre", "Country", "Language")


def movie_list_schema() -> dict[str, Any]:
    """Property schema of a freshly created movie-list database."""
    properties: dict[str, Any] = {
        "Title": {"title": {}},
        "Type": {"select": {"options": []}},
        "Year": {"number": {}},
        "Release Date": {"date": {}},
        "Runtime": {"number": {}},
        "Plot": {"rich_text": {}},
    }
    for column in MULTI_SELECT_COLUMNS:
        properties[column] = {"type": "multi_select", "multi_select": {"options": []}}
    properties.update(
        {
            "Content Rating": {"rich_text": {}},
            "IMDb Rating": {"number": {}},
            "IMDb Link": {"url": {}},
        }
    )
    return properties


def create_database_body(page_id: str) -> dict[str, Any]:
    return {
        "parent": {"type": "page_id", "page_id": page_id},
        "icon": {"type": "emoji", "emoji": MOVIE_LIST_ICON},
        "title": [{"type": "text", "text": {"content": MOVIE_LIST_TITLE, "link": None}}],
        "properties": movie_list_schema(),
    }


def title_property(content: str) -> dict[str, Any]:
    return {"type": "title", "title": [{"type": "text", "text": {"content": content}}]}


def text_property(content: str) -> dict[str, Any]:
    return {"rich_text": [{"type": "text", "text": {"content": content}}]}


def url_property(url: str) -> dict[str, Any]:
    return {"url": url}


def number_property(number: int | float) -> dict[str, Any]:
    return {"number": number}


def select_property(content: str) -> dict[str, Any]:
    return {"type": "select", "select": {"name": content}}


def multi_select_property(contents: list[str]) -> dict[str, Any]:
    return {"type": "multi_select", "multi_select": [{"name": content} for content in contents]}


def date_property(value: date) -> dict[str, Any]:
    return {"date": {"start": value.strftime("%Y-%m-%d")}}


def external_file(url: str) -> dict[str, Any]:
    return {"type": "external", "external": {"url": url}}


def database_parent(database_id: str) -> dict[str, Any]:
    return {"database_id": database_id, "type": "database_id"}


def build_page_payload(database_id: str, movie_info: MovieInfo) -> dict[str, Any]:
    """Map a movie onto a page body, leaving out every property the provider did not supply.

    Title and IMDb Link are always written; list order is kept as received.
    """
    body: dict[str, Any] = {"parent": database_parent(database_id), "properties": {}}
    if movie_info.image:
        body["cover"] = external_file(movie_info.image)

    properties = body["properties"]
    properties["Title"] = title_property(movie_info.title)
    if movie_info.movie_type:
        properties["Type"] = select_property(movie_info.movie_type)
    if movie_info.year is not None:
        properties["Year"] = number_property(int(movie_info.year))
    if movie_info.release_date is not None:
        properties["Release Date"] = date_property(movie_info.release_date)
    if movie_info.runtime is not None:
        properties["Runtime"] = number_property(int(movie_info.runtime))
    if movie_info.plot:
        properties["Plot"] = text_property(movie_info.plot)

    lists = {
        "Director": movie_info.director_list,
        "Star": movie_info.star_list,
        "Genre": movie_info.genre_list,
        "Country": movie_info.country_list,
        "Language": movie_info.language_list,
    }
    for column, values in lists.items():
        if values:
            properties[column] = multi_select_property(list(values))

    if movie_info.content_rating:
        properties["Content Rating"] = text_property(movie_info.content_rating)
    if movie_info.imdb_rating is not None:
        properties["IMDb Rating"] = number_property(float(movie_info.imdb_rating))
    properties["IMDb Link"] = url_property(movie_info.imdb_link)
    return body
