from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Union
import logging

from bot_manager.models.trading_bot import TradingBot
from bot_manager.schemas.trading_bot import TradingBotCreate, TradingBotUpdate

logger = logging.getLogger(__name__)


class BotServiceError(Exception):
    """Base error of the trading bot persistence layer"""


class BotNotFoundError(BotServiceError):
    def __init__(self, bot_id: str):
        super().__init__(f"Bot não encontrado: {bot_id}")
        self.bot_id = bot_id


class BotStorageError(BotServiceError):
    """The database rejected or failed the operation"""


class BotService:
    """CRUD over the trading_bots table, always scoped to the owning user"""

    def __init__(self, db: Session):
        self.db = db

    def list_bots(self, user_id: str) -> List[TradingBot]:
        try:
            return self.db.query(TradingBot).filter(
                TradingBot.user_id == user_id
            ).order_by(TradingBot.created_at.desc(), TradingBot.id.desc()).all()
        except SQLAlchemyError as e:
            self._fail("list", e)

    def get_bot(self, user_id: str, bot_id: str) -> TradingBot:
        try:
            bot = self.db.query(TradingBot).filter(
                TradingBot.id == bot_id,
                TradingBot.user_id == user_id
            ).first()
        except SQLAlchemyError as e:
            self._fail("get", e)

        if bot is None:
            raise BotNotFoundError(bot_id)
        return bot

    def create_bot(self, user_id: str, payload: TradingBotCreate) -> TradingBot:
        values = payload.model_dump()
        values["strategy"] = payload.strategy.value
        bot = TradingBot(user_id=user_id, **values)

        try:
            self.db.add(bot)
            self.db.commit()
            self.db.refresh(bot)
        except SQLAlchemyError as e:
            self._fail("create", e)

        logger.info(f"Bot created: {bot.id} ({bot.asset_symbol}) for user {user_id}")
        return bot

    def update_bot(self, user_id: str, bot_id: str, payload: Union[TradingBotUpdate, dict]) -> TradingBot:
        if isinstance(payload, TradingBotUpdate):
            changes = payload.model_dump(exclude_unset=True)
        else:
            changes = dict(payload)

        # identity and ownership are immutable
        changes.pop("id", None)
        changes.pop("user_id", None)
        if changes.get("strategy") is not None:
            changes["strategy"] = getattr(changes["strategy"], "value", changes["strategy"])

        bot = self.get_bot(user_id, bot_id)
        for field, value in changes.items():
            setattr(bot, field, value)

        try:
            self.db.commit()
            self.db.refresh(bot)
        except SQLAlchemyError as e:
            self._fail("update", e)

        logger.info(f"Bot updated: {bot_id} fields={sorted(changes)}")
        return bot

    def set_active(self, user_id: str, bot_id: str, is_active: bool) -> TradingBot:
        return self.update_bot(user_id, bot_id, {"is_active": is_active})

    def toggle_bot(self, user_id: str, bot_id: str) -> TradingBot:
        bot = self.get_bot(user_id, bot_id)
        return self.set_active(user_id, bot_id, not bot.is_active)

    def delete_bot(self, user_id: str, bot_id: str) -> None:
        bot = self.get_bot(user_id, bot_id)
        try:
            self.db.delete(bot)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete", e)

        logger.info(f"Bot deleted: {bot_id}")

    def _fail(self, operation: str, error: SQLAlchemyError):
        self.db.rollback()
        logger.error(f"Bot {operation} failed: {str(error)}")
        raise BotStorageError(str(error)) from error
