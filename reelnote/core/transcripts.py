"""User-facing texts, looked up by language."""

from __future__ import annotations

import enum
import html
from typing import Dict


class Language(str, enum.Enum):
    """Languages the bot can talk in."""
    EN = "en"

    @classmethod
    def default(cls) -> "Language":
        return cls.EN


class Transcripts:
    """English texts; other languages subclass and override."""

    welcome = (
        "Welcome to work with me! But we need to configure something first.\n"
        "Please use:\n\n/help to check more details."
    )
    database_error = "I got a bad memory...\nPlease let me stay alone for a while."
    message_from_no_one = "I don't know who you are, it's better not to talk to strangers"
    configure_again = "I'm so sorry I forgot who you are, can we /start all over again? 🥺"
    input_empty_imdb_token = (
        "IMDb API token should follow the /set_imdb_token command.\n e.g. /set_imdb_token abc123"
    )
    input_empty_notion_token = (
        "Notion token should follow the /set_notion_token command.\n e.g. /set_notion_token abc123"
    )
    input_empty_notion_page_id = (
        "Notion page ID or its link should follow the /create_notion_db command.\n"
        " e.g. /create_notion_db abc123"
    )
    input_empty_keyword = "Please send me the title"
    notion_database_created = "Movie list database has been created"
    need_notion_token_first = "Please /set_notion_token first."
    no_search_result = "No result was found."
    add_to_movie_list = "Add to Movie List"
    not_set = "not set"
    settings_cleared = "Your settings have been cleared."
    unknown_command = "I don't know this command. Try /help to see what I can do."
    user_hint_title = "Please config required settings."
    user_hint_help_command = "/help - display this text."
    user_hint_start_command = "/start - start to do some work with me."
    user_hint_settings_command = "/settings - show your tokens information."
    user_hint_set_imdb_token = (
        "/set_imdb_token `token` - set the IMDb API token for getting movie information. "
        "If not set, the shared default API token will be used. This token can easily reach the "
        "limit of 100 requests per day, please set your own API token."
    )
    user_hint_set_notion_token = "/set_notion_token `token` - set the Notion internal integration token."
    user_hint_create_notion_database = (
        "/create_notion_db `page link or id` - create a Notion database as your movie list."
    )
    user_hint_reset_command = "/reset - forget all your tokens."
    invalid_notion_page_url = "Invalid Notion Page Url"
    parse_notion_error_message_failed = "Can't understand what's wrong with Notion..."
    parse_notion_response_failed = "Notion answered something I can't read..."
    parse_imdb_api_error_message_failed = "Can't understand what's wrong with IMDb-API..."
    parse_imdb_api_response_failed = "IMDb-API told me nonsense..."

    def imdb_token_set_as(self, token: str) -> str:
        return f"IMDb token has been set as: {token}"

    def notion_token_set_as(self, token: str) -> str:
        return f"Notion token has been set as: {token}"

    def add_to_movie_list_successfully(self, title: str) -> str:
        return f"<b>{title}</b> has been added to your movie list successfully!"

    def cannot_reach_server(self, server_name: str) -> str:
        return f"There's something wrong when I was requesting data from {server_name}"

    def tokens_summary(self, imdb_token: str, notion_token: str, database_id: str) -> str:
        return (
            "Tokens:\n"
            f"IMDb token: {imdb_token}\n"
            f"Notion token: {notion_token}\n"
            f"Notion database ID: {database_id}"
        )

    def help_message(self, help_page: str) -> str:
        commands = "\n".join(
            [
                self.user_hint_help_command,
                self.user_hint_start_command,
                self.user_hint_settings_command,
                self.user_hint_set_imdb_token,
                self.user_hint_set_notion_token,
                self.user_hint_create_notion_database,
                self.user_hint_reset_command,
            ]
        )
        return (
            f"<b>Supported commands:</b>\n\n{commands}\n\n"
            f'Please visit <a href="{html.escape(help_page, quote=True)}"><b>this page</b></a> to get more help.'
        )


_CATALOG: Dict[Language, Transcripts] = {Language.EN: Transcripts()}


def get_transcripts(lang: Language) -> Transcripts:
    """Return the texts for a language."""
    try:
        return _CATALOG[lang]
    except KeyError:
        raise ValueError(f"Unsupported language {lang}") from None
