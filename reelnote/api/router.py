"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import health, webhooks

api_router = APIRouter()
api_router.include_router(health.router, tags=["internal"])
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["telegram"])
