from fastapi import APIRouter
from bot_manager.api.api_v1.endpoints import health, bots, assets

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(bots.router, prefix="/bots", tags=["bots"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
