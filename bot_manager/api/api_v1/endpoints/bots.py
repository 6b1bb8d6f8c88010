from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
import logging

from bot_manager.core.auth import require_user
from bot_manager.core.database import get_db
from bot_manager.models.user import User
from bot_manager.schemas.trading_bot import TradingBotCreate, TradingBotUpdate, TradingBotResponse
from bot_manager.services.bot_service import BotService, BotNotFoundError, BotStorageError

router = APIRouter()

logger = logging.getLogger(__name__)


def get_bot_service(db: Session = Depends(get_db)) -> BotService:
    return BotService(db)


def _raise_http(error: Exception):
    if isinstance(error, BotNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    logger.error(f"Bot storage failure: {error}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Storage error"
    )


@router.get("/", response_model=List[TradingBotResponse])
async def list_bots(
    user: User = Depends(require_user),
    service: BotService = Depends(get_bot_service)
):
    """List the current user's bots, newest first"""
    try:
        return service.list_bots(user.id)
    except BotStorageError as e:
        _raise_http(e)


@router.post("/", response_model=TradingBotResponse, status_code=status.HTTP_201_CREATED)
async def create_bot(
    payload: TradingBotCreate,
    user: User = Depends(require_user),
    service: BotService = Depends(get_bot_service)
):
    """Create a bot owned by the current user"""
    try:
        return service.create_bot(user.id, payload)
    except BotStorageError as e:
        _raise_http(e)


@router.get("/{bot_id}", response_model=TradingBotResponse)
async def get_bot(
    bot_id: str,
    user: User = Depends(require_user),
    service: BotService = Depends(get_bot_service)
):
    """Get a single bot"""
    try:
        return service.get_bot(user.id, bot_id)
    except (BotNotFoundError, BotStorageError) as e:
        _raise_http(e)


@router.patch("/{bot_id}", response_model=TradingBotResponse)
async def update_bot(
    bot_id: str,
    payload: TradingBotUpdate,
    user: User = Depends(require_user),
    service: BotService = Depends(get_bot_service)
):
    """Update the given fields of a bot"""
    try:
        return service.update_bot(user.id, bot_id, payload)
    except (BotNotFoundError, BotStorageError) as e:
        _raise_http(e)


@router.post("/{bot_id}/toggle", response_model=TradingBotResponse)
async def toggle_bot(
    bot_id: str,
    user: User = Depends(require_user),
    service: BotService = Depends(get_bot_service)
):
    """Flip is_active"""
    try:
        return service.toggle_bot(user.id, bot_id)
    except (BotNotFoundError, BotStorageError) as e:
        _raise_http(e)


@router.delete("/{bot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bot(
    bot_id: str,
    user: User = Depends(require_user),
    service: BotService = Depends(get_bot_service)
):
    """Delete a bot"""
    try:
        service.delete_bot(user.id, bot_id)
    except (BotNotFoundError, BotStorageError) as e:
        _raise_http(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
