"""Unit-of-work runner applying one failure policy to every command.

Invariants:
- The runner never sends anything when the job succeeds; jobs send their own
  confirmations.
- At most one failure message is sent per job.
"""

from __future__ import annotations

import logging
from typing import Awaitable

from reelnote.core.errors import WorkError, propagate_error
from reelnote.ingestion.http import ExternalAPIError
from reelnote.services.telegram_service import InlineButton, Messenger

logger = logging.getLogger("reelnote.bot")


async def send(
    messenger: Messenger,
    chat_id: int,
    text: str,
    *,
    parse_mode: str | None = None,
    buttons: list[InlineButton] | None = None,
) -> None:
    """Send a message, classifying transport failures as internal."""
    try:
        await messenger.send_message(chat_id, text, parse_mode=parse_mode, buttons=buttons)
    except ExternalAPIError as exc:
        raise propagate_error(exc, operation="send message", service="Telegram") from exc


class BotWork:
    """Run one command body for a chat and report its failure, if any."""

    def __init__(self, messenger: Messenger, chat_id: int) -> None:
        self.messenger = messenger
        self.chat_id = chat_id

    async def do_it(self, job: Awaitable[None]) -> None:
        """Await ``job``; feedback failures are answered in the chat, escalated ones re-raised."""
        try:
            await job
        except WorkError as err:
            await self._handle_failure(err)

    async def _handle_failure(self, err: WorkError) -> None:
        if err.user_message is not None:
            await send(self.messenger, self.chat_id, err.user_message)
        if err.should_escalate:
            raise err
        logger.debug("Feedback sent to chat %s: %s", self.chat_id, err.message)
