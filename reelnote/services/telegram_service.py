"""Telegram Bot API helpers for sending messages and registering the webhook."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from reelnote.ingestion.http import ExternalAPIError
from reelnote.utils.redaction import redact_secrets

logger = logging.getLogger("reelnote.services.telegram")

PARSE_MODE_HTML = "HTML"


@dataclass(slots=True)
class InlineButton:
    """A single inline keyboard button that sends ``callback_data`` back when pressed."""
    text: str
    callback_data: str


class Messenger(Protocol):
    """What the workflow needs from the chat transport."""

    async def send_message(
        self,
        chat_id: int,
        text: str,
        *,
        parse_mode: str | None = None,
        buttons: list[InlineButton] | None = None,
    ) -> None:
        ...


class TelegramClient:
    """Send Bot API requests with a shared HTTP client."""

    def __init__(self, client: httpx.AsyncClient, *, bot_token: str, base_url: str = "https://api.telegram.org") -> None:
        self.client = client
        self._endpoint = f"{base_url.rstrip('/')}/bot{bot_token}"

    async def send_message(
        self,
        chat_id: int,
        text: str,
        *,
        parse_mode: str | None = None,
        buttons: list[InlineButton] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [[{"text": button.text, "callback_data": button.callback_data}] for button in buttons]
            }
        await self._call("sendMessage", payload)

    async def set_webhook(self, url: str) -> None:
        await self._call("setWebhook", {"url": url, "allowed_updates": ["message", "callback_query"]})
        logger.info("Webhook registered at %s", redact_secrets(url))

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Issue a Bot API call and return its ``result``."""
        try:
            response = await self.client.post(f"{self._endpoint}/{method}", json=payload)
        except httpx.HTTPError as exc:
            raise ExternalAPIError(redact_secrets(f"Telegram {method} failed: {exc}")) from exc
        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalAPIError(f"Telegram {method} returned status {response.status_code}") from exc
        if not data.get("ok"):
            description = data.get("description") or f"status {response.status_code}"
            raise ExternalAPIError(f"Telegram {method} rejected: {description}")
        return data.get("result") or {}
