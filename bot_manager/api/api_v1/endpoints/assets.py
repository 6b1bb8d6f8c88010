from fastapi import APIRouter, Depends, HTTPException, status

from bot_manager.core.auth import require_user
from bot_manager.models.user import User
from bot_manager.schemas.asset import AssetSnapshot
from bot_manager.services.market_data import MarketDataProvider, get_market_data_provider

router = APIRouter()


@router.get("/{symbol}", response_model=AssetSnapshot)
async def get_asset_snapshot(
    symbol: str,
    user: User = Depends(require_user),
    provider: MarketDataProvider = Depends(get_market_data_provider)
):
    """Simulated 24h snapshot of an asset"""
    if not symbol.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Symbol is required"
        )
    return await provider.get_snapshot(symbol)
