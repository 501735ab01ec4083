"""Telegram webhook endpoint."""

from __future__ import annotations

import secrets

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from reelnote.api.deps import get_app_settings, get_dispatcher
from reelnote.bot.dispatch import BotDispatcher
from reelnote.core.config import Settings
from reelnote.schema.telegram import TelegramUpdate

router = APIRouter()


@router.post("/{token}")
async def receive_update(
    token: str,
    update: TelegramUpdate,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_app_settings),
    dispatcher: BotDispatcher = Depends(get_dispatcher),
) -> dict[str, bool]:
    """Acknowledge an update and process it after the response is sent."""
    if not secrets.compare_digest(token.encode("utf-8"), settings.tg_bot_token.encode("utf-8")):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    background_tasks.add_task(dispatcher.handle_update, update)
    return {"ok": True}
