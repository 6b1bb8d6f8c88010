from dataclasses import dataclass, asdict
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from bot_manager.models.trading_bot import Strategy, DEFAULT_STRATEGY
from bot_manager.schemas.trading_bot import TradingBotCreate, TradingBotUpdate

REQUIRED_FIELDS = ("name", "asset_symbol", "initial_capital")
REQUIRED_FIELDS_MESSAGE = "Por favor, preencha todos os campos obrigatórios"

FIELD_LABELS = {
    "name": "Nome do Bot",
    "asset_symbol": "Ativo",
    "strategy": "Estratégia",
    "initial_capital": "Capital Inicial",
    "stop_loss_percentage": "Stop Loss (%)",
    "take_profit_percentage": "Take Profit (%)",
    "max_trades_per_day": "Máximo de Trades por Dia",
}


class FormValidationError(ValueError):
    """Raised when the bot form cannot be turned into a persistable payload"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_decimal(field: str, raw: str) -> Optional[Decimal]:
    text = raw.strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise FormValidationError(f"Valor inválido para {FIELD_LABELS[field]}: {text}", field)
    if not value.is_finite():
        raise FormValidationError(f"Valor inválido para {FIELD_LABELS[field]}: {text}", field)
    return value


def _parse_int(field: str, raw: str) -> Optional[int]:
    text = raw.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise FormValidationError(f"Valor inválido para {FIELD_LABELS[field]}: {text}", field)


def _parse_strategy(raw: str) -> Strategy:
    code = raw.strip()
    if not code:
        return DEFAULT_STRATEGY
    try:
        return Strategy(code)
    except ValueError:
        raise FormValidationError(f"Estratégia inválida: {code}", "strategy")


@dataclass
class BotFormData:
    """Text values of the create/edit bot form, exactly as typed by the user"""
    name: str = ""
    asset_symbol: str = ""
    strategy: str = DEFAULT_STRATEGY.value
    initial_capital: str = ""
    stop_loss_percentage: str = ""
    take_profit_percentage: str = ""
    max_trades_per_day: str = ""

    @classmethod
    def from_bot(cls, bot) -> "BotFormData":
        """Pre-populate the form from a stored record, numbers rendered as text"""
        return cls(
            name=bot.name,
            asset_symbol=bot.asset_symbol,
            strategy=bot.strategy,
            initial_capital=_as_text(bot.initial_capital),
            stop_loss_percentage=_as_text(bot.stop_loss_percentage),
            take_profit_percentage=_as_text(bot.take_profit_percentage),
            max_trades_per_day=_as_text(bot.max_trades_per_day),
        )

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)

    def missing_required(self) -> List[str]:
        return [field for field in REQUIRED_FIELDS if not getattr(self, field).strip()]

    def validate(self) -> None:
        if self.missing_required():
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE)

    def parsed_values(self) -> Dict[str, Any]:
        """Validate and convert the text fields into typed values.

        Blank optional numbers become None, never an empty string.
        """
        self.validate()

        values = {
            "name": self.name.strip(),
            "asset_symbol": self.asset_symbol.strip().upper(),
            "strategy": _parse_strategy(self.strategy),
            "initial_capital": _parse_decimal("initial_capital", self.initial_capital),
            "stop_loss_percentage": _parse_decimal("stop_loss_percentage", self.stop_loss_percentage),
            "take_profit_percentage": _parse_decimal("take_profit_percentage", self.take_profit_percentage),
            "max_trades_per_day": _parse_int("max_trades_per_day", self.max_trades_per_day),
        }
        return values

    def to_create(self) -> TradingBotCreate:
        try:
            return TradingBotCreate(**self.parsed_values())
        except ValidationError as e:
            raise _first_error(e)

    def to_update(self) -> TradingBotUpdate:
        try:
            return TradingBotUpdate(**self.parsed_values())
        except ValidationError as e:
            raise _first_error(e)


def _first_error(error: ValidationError) -> FormValidationError:
    details = error.errors()
    if not details:
        return FormValidationError(str(error))
    first = details[0]
    field = str(first["loc"][0]) if first.get("loc") else ""
    label = FIELD_LABELS.get(field, field)
    message = f"{label}: {first['msg']}" if label else first["msg"]
    return FormValidationError(message, field or None)
