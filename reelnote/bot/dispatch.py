"""Route Telegram updates to command handlers and log escalated failures."""

from __future__ import annotations

import json
import logging
from typing import Awaitable, Callable

from reelnote.bot import handlers
from reelnote.bot.events import IncomingMessage, ItemSelection
from reelnote.bot.handlers import BotDependencies
from reelnote.core.errors import WorkError
from reelnote.schema.telegram import TelegramCallbackQuery, TelegramMessage, TelegramUpdate
from reelnote.utils.redaction import redact_secrets

logger = logging.getLogger("reelnote.bot")

SimpleHandler = Callable[[BotDependencies, IncomingMessage], Awaitable[None]]
ArgumentHandler = Callable[[BotDependencies, IncomingMessage, str], Awaitable[None]]

SIMPLE_COMMANDS: dict[str, SimpleHandler] = {
    "help": handlers.help_command,
    "start": handlers.start,
    "settings": handlers.settings,
    "reset": handlers.reset,
}
ARGUMENT_COMMANDS: dict[str, ArgumentHandler] = {
    "set_imdb_token": handlers.set_imdb_token,
    "set_notion_token": handlers.set_notion_token,
    "create_notion_db": handlers.create_notion_db,
}


def parse_command(text: str) -> tuple[str, str] | None:
    """Split ``/name@bot args`` into ``(name, args)``; None for plain text."""
    if not text.startswith("/"):
        return None
    parts = text.split(maxsplit=1)
    name = parts[0][1:].split("@", 1)[0].lower()
    if not name:
        return None
    return name, parts[1] if len(parts) > 1 else ""


def log_escalation(err: WorkError, *, update_id: int) -> None:
    """Emit an escalated failure as one structured log line."""
    payload = {"event": "work_escalated", "update_id": update_id, **err.describe()}
    logger.error(redact_secrets(json.dumps(payload, ensure_ascii=False)))


class BotDispatcher:
    """Turn one update into one unit of work."""

    def __init__(self, deps: BotDependencies) -> None:
        self.deps = deps

    async def handle_update(self, update: TelegramUpdate) -> None:
        try:
            if update.message is not None:
                await self._handle_message(update.message)
            elif update.callback_query is not None:
                await self._handle_callback(update.callback_query)
            else:
                logger.debug("Ignoring update %s without message or callback", update.update_id)
        except WorkError as err:
            log_escalation(err, update_id=update.update_id)
        except Exception:  # noqa: BLE001
            logger.exception("Unhandled error while processing update %s", update.update_id)

    async def _handle_message(self, message: TelegramMessage) -> None:
        msg = IncomingMessage(
            chat_id=message.chat.id,
            user_id=message.from_user.id if message.from_user else None,
            text=message.text,
        )
        command = parse_command(message.text or "")
        if command is None:
            await handlers.receive_keyword(self.deps, msg)
            return
        name, args = command
        if name in SIMPLE_COMMANDS:
            await SIMPLE_COMMANDS[name](self.deps, msg)
        elif name in ARGUMENT_COMMANDS:
            await ARGUMENT_COMMANDS[name](self.deps, msg, args)
        else:
            await handlers.unknown_command(self.deps, msg)

    async def _handle_callback(self, query: TelegramCallbackQuery) -> None:
        if not query.data or query.message is None:
            logger.debug("Ignoring callback %s without data or message", query.id)
            return
        selection = ItemSelection(chat_id=query.message.chat.id, user_id=query.from_user.id, item_id=query.data)
        await handlers.receive_item_selection(self.deps, selection)
