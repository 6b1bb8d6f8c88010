from fastapi import APIRouter, Depends, Query, Request, Response
from typing import Optional
import logging

from bot_manager.core.auth import AuthContext, get_auth_context, AUTH_ENTRY_POINT
from bot_manager.services import notifications
from bot_manager.services.market_data import MarketDataProvider, get_market_data_provider
from bot_manager.views.templating import render, redirect

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("/asset-search")
async def asset_search(
    request: Request,
    symbol: Optional[str] = Query(None, description="Asset symbol to look up"),
    auth: AuthContext = Depends(get_auth_context),
    provider: MarketDataProvider = Depends(get_market_data_provider)
):
    """Search box and (simulated) 24h snapshot of an asset"""
    if not auth.is_authenticated:
        return redirect(AUTH_ENTRY_POINT)

    context = {"user": auth.user, "search_term": symbol or "", "asset": None}

    if symbol is None:
        return render(request, "asset_search.html", context)

    if not symbol.strip():
        notifications.error(request, "Digite um símbolo de ativo")
        return render(request, "asset_search.html", context)

    asset = await provider.get_snapshot(symbol)

    if await request.is_disconnected():
        # the page that asked for it is gone, drop the result
        logger.info(f"Client left before snapshot of {asset.symbol} was ready, discarding")
        return Response(status_code=204)

    notifications.success(request, "Dados carregados com sucesso!")
    context["asset"] = asset
    return render(request, "asset_search.html", context)
