"""Command handlers: one unit of work per inbound event."""

from __future__ import annotations

import html
from dataclasses import dataclass

from reelnote.bot.events import IncomingMessage, ItemSelection
from reelnote.bot.runner import BotWork, send
from reelnote.core.errors import feedback_error, propagate_error
from reelnote.core.transcripts import Language, get_transcripts
from reelnote.ingestion.base import MovieInfoProvider
from reelnote.schema.credentials import UserTokens
from reelnote.services.credential_store import CredentialStore
from reelnote.services.notion_service import DEFAULT_WORKSPACE_DOMAIN, NotionClient, parse_notion_page_id
from reelnote.services.telegram_service import PARSE_MODE_HTML, InlineButton, Messenger

SEARCH_RESULT_LIMIT = 5


@dataclass(slots=True)
class BotDependencies:
    """Collaborators shared by every handler."""
    messenger: Messenger
    credentials: CredentialStore
    movie_api: MovieInfoProvider
    notion: NotionClient
    help_page: str
    notion_workspace_domain: str = DEFAULT_WORKSPACE_DOMAIN
    language: Language = Language.EN


def user_id_of(msg: IncomingMessage) -> int:
    """Return the sender; a message from nobody is a broken precondition."""
    if msg.user_id is None:
        raise propagate_error(
            get_transcripts(Language.default()).message_from_no_one, operation="resolve sender", service="Telegram"
        )
    return msg.user_id


def ensure_notion_ready(tokens: UserTokens, lang: Language) -> None:
    if not tokens.notion_token_is_good():
        raise feedback_error(tokens.user_hint(lang))


async def help_command(deps: BotDependencies, msg: IncomingMessage) -> None:
    async def job() -> None:
        text = get_transcripts(deps.language).help_message(deps.help_page)
        await send(deps.messenger, msg.chat_id, text, parse_mode=PARSE_MODE_HTML)

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def start(deps: BotDependencies, msg: IncomingMessage) -> None:
    async def job() -> None:
        user_id = user_id_of(msg)
        lang = deps.language
        await deps.credentials.ensure_user_tokens(user_id, lang)
        await send(deps.messenger, msg.chat_id, get_transcripts(lang).welcome)

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def settings(deps: BotDependencies, msg: IncomingMessage) -> None:
    async def job() -> None:
        user_id = user_id_of(msg)
        lang = deps.language
        tokens = await deps.credentials.user_tokens(user_id, lang)
        await send(deps.messenger, msg.chat_id, tokens.summary(lang))

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def set_imdb_token(deps: BotDependencies, msg: IncomingMessage, token: str) -> None:
    async def job() -> None:
        value = token.strip()
        user_id = user_id_of(msg)
        lang = deps.language
        texts = get_transcripts(lang)
        if not value:
            raise feedback_error(texts.input_empty_imdb_token)
        if not await deps.credentials.store_imdb_token(user_id, value, lang):
            raise feedback_error(texts.configure_again)
        await send(deps.messenger, msg.chat_id, texts.imdb_token_set_as(value))

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def set_notion_token(deps: BotDependencies, msg: IncomingMessage, token: str) -> None:
    async def job() -> None:
        value = token.strip()
        user_id = user_id_of(msg)
        lang = deps.language
        texts = get_transcripts(lang)
        if not value:
            raise feedback_error(texts.input_empty_notion_token)
        if not await deps.credentials.store_notion_token(user_id, value, lang):
            raise feedback_error(texts.configure_again)
        await send(deps.messenger, msg.chat_id, texts.notion_token_set_as(value))

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def create_notion_db(deps: BotDependencies, msg: IncomingMessage, page_link_or_id: str) -> None:
    async def job() -> None:
        value = page_link_or_id.strip()
        user_id = user_id_of(msg)
        lang = deps.language
        texts = get_transcripts(lang)
        if not value:
            raise feedback_error(texts.input_empty_notion_page_id)

        notion_token = await deps.credentials.notion_integration_token(user_id, lang)
        if not notion_token:
            raise feedback_error(texts.need_notion_token_first)

        page_id = parse_notion_page_id(value, lang, deps.notion_workspace_domain)
        database_id = await deps.notion.create_database(notion_token, page_id, lang)
        if not await deps.credentials.store_notion_database_id(user_id, database_id, lang):
            raise feedback_error(texts.configure_again)
        await send(deps.messenger, msg.chat_id, texts.notion_database_created)

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def reset(deps: BotDependencies, msg: IncomingMessage) -> None:
    async def job() -> None:
        user_id = user_id_of(msg)
        lang = deps.language
        await deps.credentials.reset_user_tokens(user_id, lang)
        await send(deps.messenger, msg.chat_id, get_transcripts(lang).settings_cleared)

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def unknown_command(deps: BotDependencies, msg: IncomingMessage) -> None:
    async def job() -> None:
        raise feedback_error(get_transcripts(deps.language).unknown_command)

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def receive_keyword(deps: BotDependencies, msg: IncomingMessage) -> None:
    """Search the provider and offer each hit with an "add" button, best match last."""

    async def job() -> None:
        user_id = user_id_of(msg)
        lang = deps.language
        texts = get_transcripts(lang)
        tokens = await deps.credentials.user_tokens(user_id, lang)
        ensure_notion_ready(tokens, lang)

        title = (msg.text or "").strip()
        if not title:
            raise feedback_error(texts.input_empty_keyword)

        search_results = await deps.movie_api.search(tokens.imdb_token, title, SEARCH_RESULT_LIMIT, lang)
        if not search_results:
            await send(deps.messenger, msg.chat_id, f"<b>{texts.no_search_result}</b>", parse_mode=PARSE_MODE_HTML)
            return

        # Sent in reverse so the most relevant result ends up at the bottom of the chat.
        for result in reversed(search_results):
            link = html.escape(deps.movie_api.item_url(result.id), quote=True)
            text = f'<a href="{link}"><b>{html.escape(result.title)}</b></a>'
            if result.description:
                text += f" {html.escape(result.description)}"
            await send(
                deps.messenger,
                msg.chat_id,
                text,
                parse_mode=PARSE_MODE_HTML,
                buttons=[InlineButton(text=texts.add_to_movie_list, callback_data=result.id)],
            )

    await BotWork(deps.messenger, msg.chat_id).do_it(job())


async def receive_item_selection(deps: BotDependencies, selection: ItemSelection) -> None:
    """Fetch the chosen title and add it to the pressing user's movie list."""

    async def job() -> None:
        lang = deps.language
        tokens = await deps.credentials.user_tokens(selection.user_id, lang)
        ensure_notion_ready(tokens, lang)

        movie_info = await deps.movie_api.fetch(tokens.imdb_token, selection.item_id, lang)
        await deps.notion.insert_movie_info(tokens.notion_token, tokens.notion_database_id, movie_info, lang)

        message = get_transcripts(lang).add_to_movie_list_successfully(html.escape(movie_info.title))
        await send(deps.messenger, selection.chat_id, message, parse_mode=PARSE_MODE_HTML)

    await BotWork(deps.messenger, selection.chat_id).do_it(job())
