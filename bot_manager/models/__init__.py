from bot_manager.models.user import User
from bot_manager.models.trading_bot import TradingBot, Strategy

__all__ = ["User", "TradingBot", "Strategy"]
