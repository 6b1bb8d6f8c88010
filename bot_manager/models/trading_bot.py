import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from bot_manager.core.database import Base


class Strategy(str, Enum):
    """Trading strategy label stored with a bot"""
    SCALPING = "scalping"
    DAY_TRADE = "day_trade"
    SWING = "swing"
    GRID = "grid"
    DCA = "dca"

    @property
    def label(self) -> str:
        return STRATEGY_LABELS[self]

    @classmethod
    def choices(cls):
        return [(strategy.value, strategy.label) for strategy in cls]


STRATEGY_LABELS = {
    Strategy.SCALPING: "Scalping",
    Strategy.DAY_TRADE: "Day Trade",
    Strategy.SWING: "Swing Trading",
    Strategy.GRID: "Grid Trading",
    Strategy.DCA: "DCA (Dollar Cost Average)",
}

DEFAULT_STRATEGY = Strategy.SCALPING


class TradingBot(Base):
    """Trading bot configuration table"""
    __tablename__ = "trading_bots"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    asset_symbol = Column(String(20), nullable=False, index=True)
    strategy = Column(String(20), nullable=False, default=DEFAULT_STRATEGY.value)

    # Capital and risk settings
    initial_capital = Column(Numeric(15, 2), nullable=False)
    stop_loss_percentage = Column(Numeric(6, 2), nullable=True)
    take_profit_percentage = Column(Numeric(6, 2), nullable=True)
    max_trades_per_day = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="bots")

    def __repr__(self):
        return f"<TradingBot(id={self.id}, name={self.name}, symbol={self.asset_symbol}, active={self.is_active})>"

    @property
    def strategy_label(self) -> str:
        try:
            return Strategy(self.strategy).label
        except ValueError:
            return self.strategy
