"""Command handler tests: what the user sees and what gets stored."""

from __future__ import annotations

import httpx
import pytest
import respx

from reelnote.bot import handlers
from reelnote.bot.events import IncomingMessage, ItemSelection
from reelnote.core.errors import FeedbackPropagateError, PropagateError
from reelnote.core.transcripts import Language, get_transcripts
from reelnote.ingestion.base import SearchResult
from reelnote.ingestion.imdb import ImdbApiConnector
from reelnote.services.telegram_service import PARSE_MODE_HTML

TEXTS = get_transcripts(Language.EN)
CHAT_ID = 1000
USER_ID = 77


def message(text: str | None = None, user_id: int | None = USER_ID) -> IncomingMessage:
    return IncomingMessage(chat_id=CHAT_ID, user_id=user_id, text=text)


async def ready_user(deps, user_id: int = USER_ID, imdb_token: str = "") -> None:
    await deps.credentials.ensure_user_tokens(user_id)
    await deps.credentials.store_notion_token(user_id, "secret_n")
    await deps.credentials.store_notion_database_id(user_id, "db-1")
    if imdb_token:
        await deps.credentials.store_imdb_token(user_id, imdb_token)


@pytest.mark.asyncio
async def test_help_lists_commands_and_help_page(deps, messenger) -> None:
    await handlers.help_command(deps, message("/help"))

    [sent] = messenger.sent
    assert sent.parse_mode == PARSE_MODE_HTML
    assert "/set_imdb_token" in sent.text
    assert '<a href="https://www.notion.so/help-page">' in sent.text


@pytest.mark.asyncio
async def test_start_creates_row_once_and_welcomes(deps, messenger) -> None:
    await handlers.start(deps, message("/start"))
    await deps.credentials.store_imdb_token(USER_ID, "k1")
    await handlers.start(deps, message("/start"))

    assert messenger.texts == [TEXTS.welcome, TEXTS.welcome]
    assert (await deps.credentials.user_tokens(USER_ID)).imdb_token == "k1"


@pytest.mark.asyncio
async def test_start_without_sender_escalates_silently(deps, messenger) -> None:
    with pytest.raises(PropagateError) as info:
        await handlers.start(deps, message("/start", user_id=None))

    assert messenger.sent == []
    assert info.value.message == TEXTS.message_from_no_one


@pytest.mark.asyncio
async def test_settings_shows_placeholders(deps, messenger) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)
    await deps.credentials.store_imdb_token(USER_ID, "k1")

    await handlers.settings(deps, message("/settings"))

    assert messenger.texts == [
        "Tokens:\nIMDb token: k1\nNotion token: not set\nNotion database ID: not set"
    ]


@pytest.mark.asyncio
async def test_settings_without_row_asks_to_start(deps, messenger) -> None:
    await handlers.settings(deps, message("/settings"))

    assert messenger.texts == [TEXTS.configure_again]


@pytest.mark.asyncio
async def test_set_imdb_token_echoes_value(deps, messenger) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)

    await handlers.set_imdb_token(deps, message("/set_imdb_token k_abc"), " k_abc ")

    assert messenger.texts == [TEXTS.imdb_token_set_as("k_abc")]
    assert await deps.credentials.imdb_token(USER_ID) == "k_abc"


@pytest.mark.asyncio
async def test_set_token_with_empty_argument_is_feedback(deps, messenger) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)

    await handlers.set_imdb_token(deps, message("/set_imdb_token"), "")
    await handlers.set_notion_token(deps, message("/set_notion_token"), "   ")

    assert messenger.texts == [TEXTS.input_empty_imdb_token, TEXTS.input_empty_notion_token]
    assert await deps.credentials.imdb_token(USER_ID) == ""


@pytest.mark.asyncio
async def test_set_token_without_row_asks_to_start(deps, messenger) -> None:
    await handlers.set_notion_token(deps, message("/set_notion_token secret"), "secret")

    assert messenger.texts == [TEXTS.configure_again]
    assert await deps.credentials.get_user_tokens(USER_ID) is None


@pytest.mark.asyncio
async def test_create_notion_db_needs_notion_token(deps, messenger, notion) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)

    await handlers.create_notion_db(deps, message(), "abc123")

    assert messenger.texts == [TEXTS.need_notion_token_first]
    assert notion.created == []


@pytest.mark.asyncio
async def test_create_notion_db_rejects_foreign_link(deps, messenger, notion) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)
    await deps.credentials.store_notion_token(USER_ID, "secret_n")

    await handlers.create_notion_db(deps, message(), "https://example.com/page-abc")

    assert messenger.texts == [TEXTS.invalid_notion_page_url]
    assert notion.created == []


@pytest.mark.asyncio
async def test_create_notion_db_stores_new_database(deps, messenger, notion) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)
    await deps.credentials.store_notion_token(USER_ID, "secret_n")

    await handlers.create_notion_db(deps, message(), "https://www.notion.so/octocat/Movies-abc123")

    assert notion.created == [("secret_n", "abc123")]
    assert messenger.texts == [TEXTS.notion_database_created]
    assert (await deps.credentials.user_tokens(USER_ID)).notion_database_id == "db-123"


@pytest.mark.asyncio
async def test_create_notion_db_passes_unparsable_link_through_as_id(deps, messenger, notion) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)
    await deps.credentials.store_notion_token(USER_ID, "secret_n")

    await handlers.create_notion_db(deps, message(), "https://[notion.so/page")

    assert notion.created == [("secret_n", "https://[notion.so/page")]
    assert messenger.texts == [TEXTS.notion_database_created]


@pytest.mark.asyncio
async def test_help_escapes_help_page_link(deps, messenger) -> None:
    deps.help_page = 'https://www.notion.so/help?a=1&b="2"'

    await handlers.help_command(deps, message("/help"))

    [sent] = messenger.sent
    assert '<a href="https://www.notion.so/help?a=1&amp;b=&quot;2&quot;">' in sent.text


@pytest.mark.asyncio
async def test_search_requires_notion_settings(deps, messenger, movie_api) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)
    await deps.credentials.store_notion_token(USER_ID, "secret_n")

    await handlers.receive_keyword(deps, message("Inception"))

    assert movie_api.search_calls == []
    [hint] = messenger.texts
    assert hint.splitlines() == [TEXTS.user_hint_title, "", TEXTS.user_hint_create_notion_database]


@pytest.mark.asyncio
async def test_search_with_blank_text_asks_for_title(deps, messenger, movie_api) -> None:
    await ready_user(deps)

    await handlers.receive_keyword(deps, message("   "))

    assert messenger.texts == [TEXTS.input_empty_keyword]
    assert movie_api.search_calls == []


@pytest.mark.asyncio
async def test_search_without_results(deps, messenger) -> None:
    await ready_user(deps)

    await handlers.receive_keyword(deps, message("zzz"))

    [sent] = messenger.sent
    assert sent.text == "<b>No result was found.</b>"
    assert sent.parse_mode == PARSE_MODE_HTML
    assert sent.buttons is None


@pytest.mark.asyncio
async def test_search_sends_best_match_last(deps, messenger, movie_api) -> None:
    await ready_user(deps, imdb_token="k1")
    movie_api.results = [
        SearchResult(id="tt1", title="Inception", description="(2010)"),
        SearchResult(id="tt2", title="Tom & Jerry", description=""),
    ]

    await handlers.receive_keyword(deps, message("  Inception "))

    assert movie_api.search_calls == [("k1", "Inception", handlers.SEARCH_RESULT_LIMIT)]
    first, second = messenger.sent
    assert first.text == '<a href="https://movies.example.com/tt2"><b>Tom &amp; Jerry</b></a>'
    assert second.text == '<a href="https://movies.example.com/tt1"><b>Inception</b></a> (2010)'
    assert [b.callback_data for b in first.buttons] == ["tt2"]
    assert [b.text for b in second.buttons] == [TEXTS.add_to_movie_list]


@pytest.mark.asyncio
@respx.mock
async def test_search_through_imdb_api_caps_at_five(deps, messenger) -> None:
    await ready_user(deps)
    results = [{"id": f"tt{i}", "title": f"Title {i}", "description": f"({2000 + i}) Movie"} for i in range(8)]
    respx.get("https://imdb-api.com/API/SearchTitle/default-key/Title").mock(
        return_value=httpx.Response(200, json={"results": results, "errorMessage": ""})
    )

    async with httpx.AsyncClient() as client:
        deps.movie_api = ImdbApiConnector(client, default_key="default-key")
        await handlers.receive_keyword(deps, message("Title"))

    assert len(messenger.sent) == 5
    assert [m.buttons[0].callback_data for m in messenger.sent] == ["tt4", "tt3", "tt2", "tt1", "tt0"]
    assert messenger.sent[-1].text.endswith("</a> (2000)")


@pytest.mark.asyncio
@respx.mock
async def test_provider_rejection_is_shown_verbatim(deps, messenger) -> None:
    await ready_user(deps, imdb_token="bad")
    respx.get("https://imdb-api.com/API/SearchTitle/bad/Title").mock(
        return_value=httpx.Response(200, json={"results": None, "errorMessage": "Invalid API Key"})
    )

    async with httpx.AsyncClient() as client:
        deps.movie_api = ImdbApiConnector(client, default_key="default-key")
        await handlers.receive_keyword(deps, message("Title"))

    assert messenger.texts == ["Invalid API Key"]


@pytest.mark.asyncio
async def test_selection_adds_movie_to_list(deps, messenger, movie_api, notion) -> None:
    await ready_user(deps, imdb_token="k1")

    await handlers.receive_item_selection(deps, ItemSelection(chat_id=CHAT_ID, user_id=USER_ID, item_id="tt1375666"))

    assert movie_api.fetch_calls == [("k1", "tt1375666")]
    assert [(token, db) for token, db, _ in notion.inserted] == [("secret_n", "db-1")]
    [sent] = messenger.sent
    assert sent.text == "<b>Inception</b> has been added to your movie list successfully!"
    assert sent.parse_mode == PARSE_MODE_HTML


@pytest.mark.asyncio
async def test_selection_requires_notion_settings(deps, messenger, movie_api, notion) -> None:
    await deps.credentials.ensure_user_tokens(USER_ID)

    await handlers.receive_item_selection(deps, ItemSelection(chat_id=CHAT_ID, user_id=USER_ID, item_id="tt1"))

    assert movie_api.fetch_calls == []
    assert notion.inserted == []
    [hint] = messenger.texts
    assert hint.splitlines() == [
        TEXTS.user_hint_title,
        "",
        TEXTS.user_hint_set_notion_token,
        TEXTS.user_hint_create_notion_database,
    ]


@pytest.mark.asyncio
async def test_selection_notion_outage_is_reported_and_escalated(deps, messenger, notion) -> None:
    await ready_user(deps)

    async def unreachable(*args, **kwargs) -> None:
        raise FeedbackPropagateError(TEXTS.cannot_reach_server("Notion"), cause=httpx.ConnectError("refused"))

    notion.insert_movie_info = unreachable

    with pytest.raises(FeedbackPropagateError):
        await handlers.receive_item_selection(deps, ItemSelection(chat_id=CHAT_ID, user_id=USER_ID, item_id="tt1"))

    assert messenger.texts == [TEXTS.cannot_reach_server("Notion")]


@pytest.mark.asyncio
async def test_reset_clears_tokens(deps, messenger) -> None:
    await ready_user(deps, imdb_token="k1")

    await handlers.reset(deps, message("/reset"))

    assert messenger.texts == [TEXTS.settings_cleared]
    tokens = await deps.credentials.user_tokens(USER_ID)
    assert not tokens.notion_token_is_good()
    assert tokens.imdb_token == ""


@pytest.mark.asyncio
async def test_unknown_command_is_feedback(deps, messenger) -> None:
    await handlers.unknown_command(deps, message("/dance"))

    assert messenger.texts == [TEXTS.unknown_command]
