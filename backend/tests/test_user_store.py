"""SQL user store against an in-memory SQLite database."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from moneyflow.database import Base
from moneyflow.models.user import User
from moneyflow.services.access_control import AccessControl
from moneyflow.services.user_store import SqlUserStore


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


def test_find_one_missing(session_factory):
    assert SqlUserStore(session_factory).find_one(12345) is None


def test_register_creates_unpaid_user_once(session_factory):
    store = SqlUserStore(session_factory)
    user = store.register(12345, "Dara")
    assert user.telegram_id == 12345
    assert user.first_name == "Dara"
    assert user.is_paid is False
    assert user.tier is None

    again = store.register(12345, "Someone else")
    assert again.id == user.id
    assert again.first_name == "Dara"

    found = store.find_one(12345)
    assert found is not None
    assert found.id == user.id


def test_access_control_over_sql_store(session_factory):
    db = session_factory()
    try:
        db.add(User(telegram_id=1, is_paid=False))
        db.add(User(telegram_id=2, is_paid=True, tier="vip"))
        db.commit()
    finally:
        db.close()

    access = AccessControl(SqlUserStore(session_factory))
    assert access.check_access(1, "daily_lessons").has_access is False
    granted = access.check_access(2, "booking_system")
    assert granted.has_access is True
    assert granted.user.telegram_id == 2
