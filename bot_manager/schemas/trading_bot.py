from pydantic import AfterValidator, BaseModel, Field, StringConstraints, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from bot_manager.models.trading_bot import Strategy, DEFAULT_STRATEGY


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name must not be empty")
    return value


def _clean_symbol(value: str) -> str:
    value = value.strip().upper()
    if not value:
        raise ValueError("asset_symbol must not be empty")
    return value


BotName = Annotated[str, StringConstraints(max_length=100), AfterValidator(_clean_name)]
AssetSymbol = Annotated[str, StringConstraints(max_length=20), AfterValidator(_clean_symbol)]

# Numeric(15, 2) and Numeric(6, 2) columns
Capital = Annotated[Decimal, Field(max_digits=15, decimal_places=2)]
Percentage = Annotated[Decimal, Field(max_digits=6, decimal_places=2)]


class TradingBotBase(BaseModel):
    name: BotName = Field(..., description="Bot display name")
    asset_symbol: AssetSymbol = Field(..., description="Asset symbol (e.g. BTCUSDT)")
    strategy: Strategy = DEFAULT_STRATEGY
    initial_capital: Capital = Field(..., description="Initial capital")
    stop_loss_percentage: Optional[Percentage] = None
    take_profit_percentage: Optional[Percentage] = None
    max_trades_per_day: Optional[int] = Field(None, ge=0)


class TradingBotCreate(TradingBotBase):
    is_active: bool = False

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Bot BTC Scalping",
                "asset_symbol": "BTCUSDT",
                "strategy": "scalping",
                "initial_capital": "1000.00",
                "stop_loss_percentage": "2.0",
                "take_profit_percentage": "5.0",
                "max_trades_per_day": 10,
            }
        }
    }


class TradingBotUpdate(BaseModel):
    """Partial update; is_active is changed through the toggle operation only"""
    name: Optional[BotName] = None
    asset_symbol: Optional[AssetSymbol] = None
    strategy: Optional[Strategy] = None
    initial_capital: Optional[Capital] = None
    stop_loss_percentage: Optional[Percentage] = None
    take_profit_percentage: Optional[Percentage] = None
    max_trades_per_day: Optional[int] = Field(None, ge=0)

    @field_validator("name", "asset_symbol", "strategy", "initial_capital")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("field cannot be cleared")
        return value


class TradingBotResponse(BaseModel):
    id: str
    user_id: str
    name: str
    asset_symbol: str
    strategy: str
    initial_capital: Decimal
    stop_loss_percentage: Optional[Decimal] = None
    take_profit_percentage: Optional[Decimal] = None
    max_trades_per_day: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
