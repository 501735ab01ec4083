"""Minimal envelopes the dispatcher hands to command handlers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class IncomingMessage:
    """A chat message; ``user_id`` is None when Telegram did not say who sent it."""
    chat_id: int
    user_id: int | None
    text: str | None = None


@dataclass(slots=True)
class ItemSelection:
    """A press on a search result's button."""
    chat_id: int
    user_id: int
    item_id: str
