from abc import ABC, abstractmethod
import asyncio
import logging

from bot_manager.core.config import settings
from bot_manager.schemas.asset import AssetSnapshot

logger = logging.getLogger(__name__)


class MarketDataProvider(ABC):
    """Source of asset price snapshots"""

    @abstractmethod
    async def get_snapshot(self, symbol: str) -> AssetSnapshot:
        """Return the 24h snapshot of `symbol`"""
        pass


class SimulatedMarketDataProvider(MarketDataProvider):
    """Placeholder provider: waits a fixed delay and returns static figures.

    No exchange is contacted; every symbol gets the same values, only the
    symbol itself is echoed back (trimmed and uppercased).
    """

    PLACEHOLDER = {
        "price": "42,567.89",
        "change_24h": "+3.45",
        "volume": "1,234,567,890",
        "high_24h": "43,210.50",
        "low_24h": "41,890.20",
    }

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    async def get_snapshot(self, symbol: str) -> AssetSnapshot:
        symbol = symbol.strip().upper()
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        logger.debug(f"Simulated snapshot for {symbol}")
        return AssetSnapshot(symbol=symbol, **self.PLACEHOLDER)


def get_market_data_provider() -> MarketDataProvider:
    return SimulatedMarketDataProvider(delay=settings.asset_search_delay)
