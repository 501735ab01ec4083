from fastapi import HTTPException, Request, status

from reelnote.bot.dispatch import BotDispatcher
from reelnote.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_dispatcher(request: Request) -> BotDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Bot is not ready")
    return dispatcher
