import pytest
from unittest.mock import patch
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bot_manager.core.database import Base
from bot_manager.models.user import User
from bot_manager.models.trading_bot import TradingBot, Strategy
from bot_manager.schemas.trading_bot import TradingBotCreate, TradingBotUpdate
from bot_manager.services.bot_service import (
    BotService, BotNotFoundError, BotStorageError, BotServiceError
)

engine = create_engine(
    "sqlite:///:memory:",
    poolclass=StaticPool,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def service(db):
    return BotService(db)


def _user(db, email):
    user = User(email=email, password_hash="x")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def alice(db):
    return _user(db, "alice@example.com")


@pytest.fixture
def bob(db):
    return _user(db, "bob@example.com")


def _payload(**overrides):
    values = {
        "name": "Bot BTC Scalping",
        "asset_symbol": "btcusdt",
        "strategy": "scalping",
        "initial_capital": "1000.00",
    }
    values.update(overrides)
    return TradingBotCreate(**values)


def test_create_bot(service, alice):
    bot = service.create_bot(alice.id, _payload())

    assert bot.id is not None
    assert bot.user_id == alice.id
    assert bot.asset_symbol == "BTCUSDT"
    assert bot.strategy == "scalping"
    assert bot.initial_capital == Decimal("1000.00")
    assert bot.stop_loss_percentage is None
    assert bot.take_profit_percentage is None
    assert bot.max_trades_per_day is None
    assert bot.is_active == False


def test_list_bots_newest_first(service, alice):
    first = service.create_bot(alice.id, _payload(name="First"))
    second = service.create_bot(alice.id, _payload(name="Second"))
    third = service.create_bot(alice.id, _payload(name="Third"))

    bots = service.list_bots(alice.id)

    assert [bot.id for bot in bots] == [third.id, second.id, first.id]


def test_list_bots_scoped_to_owner(service, alice, bob):
    service.create_bot(alice.id, _payload(name="Alice bot"))
    service.create_bot(bob.id, _payload(name="Bob bot"))

    assert [bot.name for bot in service.list_bots(alice.id)] == ["Alice bot"]
    assert [bot.name for bot in service.list_bots(bob.id)] == ["Bob bot"]


def test_list_bots_empty(service, alice):
    assert service.list_bots(alice.id) == []


def test_get_bot(service, alice):
    created = service.create_bot(alice.id, _payload())

    bot = service.get_bot(alice.id, created.id)

    assert bot.id == created.id


def test_get_bot_not_found(service, alice):
    with pytest.raises(BotNotFoundError):
        service.get_bot(alice.id, "missing-id")


def test_get_bot_of_other_user_is_not_found(service, alice, bob):
    created = service.create_bot(alice.id, _payload())

    with pytest.raises(BotNotFoundError):
        service.get_bot(bob.id, created.id)


def test_update_bot_changes_only_given_fields(service, alice):
    created = service.create_bot(alice.id, _payload(stop_loss_percentage="2.0"))

    updated = service.update_bot(
        alice.id, created.id,
        TradingBotUpdate(name="Renamed", asset_symbol="ethusdt", strategy=Strategy.SWING)
    )

    assert updated.name == "Renamed"
    assert updated.asset_symbol == "ETHUSDT"
    assert updated.strategy == "swing"
    assert updated.initial_capital == Decimal("1000.00")
    assert updated.stop_loss_percentage == Decimal("2.00")


def test_update_bot_clears_optional_fields(service, alice):
    created = service.create_bot(alice.id, _payload(take_profit_percentage="5.0", max_trades_per_day=10))

    updated = service.update_bot(
        alice.id, created.id,
        TradingBotUpdate(take_profit_percentage=None, max_trades_per_day=None)
    )

    assert updated.take_profit_percentage is None
    assert updated.max_trades_per_day is None


def test_update_bot_keeps_identity(service, alice, bob):
    created = service.create_bot(alice.id, _payload())
    bot_id = created.id

    updated = service.update_bot(alice.id, bot_id, {"id": "other", "user_id": bob.id, "name": "Still mine"})

    assert updated.id == bot_id
    assert updated.user_id == alice.id
    assert updated.name == "Still mine"


def test_update_bot_of_other_user_is_rejected(service, alice, bob):
    created = service.create_bot(alice.id, _payload())

    with pytest.raises(BotNotFoundError):
        service.update_bot(bob.id, created.id, TradingBotUpdate(name="Hijacked"))

    assert service.get_bot(alice.id, created.id).name == "Bot BTC Scalping"


def test_toggle_bot_changes_only_is_active(service, db, alice):
    created = service.create_bot(alice.id, _payload(stop_loss_percentage="2.5", max_trades_per_day=3))
    columns = [c.name for c in TradingBot.__table__.columns if c.name not in ("is_active", "updated_at")]
    before = {name: getattr(created, name) for name in columns}

    toggled = service.toggle_bot(alice.id, created.id)
    db.expire_all()
    after_bot = service.get_bot(alice.id, created.id)

    assert toggled.is_active == True
    assert after_bot.is_active == True
    assert {name: getattr(after_bot, name) for name in columns} == before

    assert service.toggle_bot(alice.id, created.id).is_active == False


def test_set_active(service, alice):
    created = service.create_bot(alice.id, _payload())

    assert service.set_active(alice.id, created.id, True).is_active == True
    assert service.set_active(alice.id, created.id, True).is_active == True


def test_delete_bot(service, alice, bob):
    alice_bot = service.create_bot(alice.id, _payload(name="Alice bot"))
    bob_bot = service.create_bot(bob.id, _payload(name="Bob bot"))

    service.delete_bot(alice.id, alice_bot.id)

    assert service.list_bots(alice.id) == []
    assert [bot.id for bot in service.list_bots(bob.id)] == [bob_bot.id]


def test_delete_bot_of_other_user_is_rejected(service, alice, bob):
    created = service.create_bot(alice.id, _payload())

    with pytest.raises(BotNotFoundError):
        service.delete_bot(bob.id, created.id)

    assert len(service.list_bots(alice.id)) == 1


def test_storage_error_is_wrapped_and_rolled_back(service, db, alice):
    with patch.object(db, "commit", side_effect=OperationalError("INSERT", {}, Exception("disk I/O error"))):
        with patch.object(db, "rollback") as mock_rollback:
            with pytest.raises(BotStorageError) as exc_info:
                service.create_bot(alice.id, _payload())

    mock_rollback.assert_called_once()
    assert "disk I/O error" in str(exc_info.value)
    assert isinstance(exc_info.value, BotServiceError)
