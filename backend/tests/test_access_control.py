"""Tests for tier-based access control against an in-memory user store."""
import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest

from moneyflow import messages
from moneyflow.models.types import Tier
from moneyflow.schemas.telegram import Message
from moneyflow.services.access_control import AccessControl
from moneyflow.services.tier_manager import TierManager
from moneyflow.transport.mock_impl import MockTransport


class FakeUserStore:
    def __init__(self, users=None, error=None):
        self.users = users or {}
        self.error = error

    def find_one(self, telegram_id):
        if self.error:
            raise self.error
        return self.users.get(telegram_id)


def _user(is_paid=True, tier=None, tier_price=None, payment_date=None):
    return SimpleNamespace(is_paid=is_paid, tier=tier, tier_price=tier_price, payment_date=payment_date)


@pytest.fixture
def access():
    return AccessControl(
        FakeUserStore(
            {
                1: _user(is_paid=False),
                2: _user(tier=None),
                3: _user(tier="premium", tier_price=Decimal("97"), payment_date=datetime(2026, 1, 5, tzinfo=timezone.utc)),
                4: _user(tier="vip"),
            }
        )
    )


def test_unknown_user_denied(access):
    result = access.check_access(999, "daily_lessons")
    assert result.has_access is False
    assert result.user_tier == Tier.FREE
    assert result.message == messages.ACCESS_NOT_REGISTERED


def test_unpaid_user_denied_with_pay_message(access):
    result = access.check_access(1, "advanced_analytics")
    assert result.has_access is False
    assert result.user_tier == "free"
    assert result.message == messages.ACCESS_NOT_PAID
    assert result.user is None


def test_paid_user_without_tier_defaults_to_essential(access):
    granted = access.check_access(2, "daily_lessons")
    assert granted.has_access is True
    assert granted.user_tier == Tier.ESSENTIAL

    denied = access.check_access(2, "advanced_analytics")
    assert denied.has_access is False
    assert denied.user_tier == Tier.ESSENTIAL
    assert denied.message == messages.ACCESS_UPGRADE_REQUIRED.format(badge="🎯")


def test_premium_user_granted_with_user_record(access):
    result = access.check_access(3, "admin_access")
    assert result.has_access is True
    assert result.user_tier == Tier.PREMIUM
    assert result.user is not None
    assert result.message is None
    assert access.has_admin_access(3) is True
    assert access.can_book_sessions(3) is False
    assert access.can_book_sessions(4) is True


def test_lookup_error_fails_closed():
    access = AccessControl(FakeUserStore(error=RuntimeError("db down")))
    result = access.check_access(3, "daily_lessons")
    assert result.has_access is False
    assert result.user_tier == Tier.FREE
    assert result.message == messages.ACCESS_ERROR


def test_invalid_tier_value_fails_closed():
    access = AccessControl(FakeUserStore({5: _user(tier="platinum")}))
    result = access.check_access(5, "daily_lessons")
    assert result.has_access is False
    assert result.message == messages.ACCESS_ERROR


def test_user_tier_info(access):
    free = access.get_user_tier_info(1)
    assert free.tier == Tier.FREE
    assert free.badge == "🔓"
    assert free.price is None

    premium = access.get_user_tier_info(3)
    assert premium.tier == Tier.PREMIUM
    assert premium.tier_info.name == "Premium"
    assert premium.price == Decimal("97")
    assert premium.paid_at == datetime(2026, 1, 5, tzinfo=timezone.utc)

    assert access.get_user_tier_info(2).price == 0


def test_user_tier_info_on_error_is_free():
    access = AccessControl(FakeUserStore(error=RuntimeError("db down")))
    assert access.get_user_tier_info(3).tier == Tier.FREE


def test_help_by_tier(access):
    free_help = access.get_tier_specific_help(999)
    assert "/financial_quiz" in free_help
    assert "/day1" not in free_help
    assert messages.PRICING_UNPAID in free_help

    essential_help = access.get_tier_specific_help(2)
    assert "/day1" in essential_help
    assert "Essential" in essential_help
    assert messages.PRICING_PAID in essential_help
    assert "/admin_contact" not in essential_help

    premium_help = access.get_tier_specific_help(3)
    assert "/admin_contact" in premium_help
    assert "/book_session" not in premium_help

    vip_help = access.get_tier_specific_help(4)
    assert "/admin_contact" in vip_help
    assert "/book_session" in vip_help


def test_help_falls_back_on_error():
    access = AccessControl(FakeUserStore(error=RuntimeError("db down")))
    # tier info degrades to free, then the payment lookup raises
    assert access.get_tier_specific_help(3) == messages.HELP_FALLBACK


def test_support_message(access):
    assert access.get_tier_support_message(Tier.VIP) == messages.TIER_SUPPORT[Tier.VIP]
    assert access.get_tier_support_message("premium") == messages.TIER_SUPPORT[Tier.PREMIUM]
    assert access.get_tier_support_message("unknown") == messages.TIER_SUPPORT[Tier.FREE]
    assert access.get_tier_support_message(None) == messages.TIER_SUPPORT[Tier.FREE]


def test_tier_manager_is_cumulative():
    tiers = TierManager()
    assert tiers.has_feature_access(Tier.FREE, "financial_quiz")
    assert not tiers.has_feature_access(Tier.FREE, "daily_lessons")
    assert tiers.has_feature_access("vip", "daily_lessons")
    assert tiers.has_feature_access("vip", "booking_system")
    assert not tiers.has_feature_access("premium", "booking_system")
    assert [tiers.get_tier_info(t).price for t in Tier] == [0, 47, 97, 197]
    with pytest.raises(ValueError):
        tiers.get_tier_badge("gold")


def _message(user_id, text="/book_session"):
    return Message.model_validate(
        {"message_id": 1, "chat": {"id": user_id + 1000}, "from": {"id": user_id}, "text": text}
    )


def test_requires_feature_denies_and_notifies(access):
    transport = MockTransport()
    calls = []

    @access.requires_feature("booking_system", transport)
    async def handler(message, result):
        calls.append(result)

    allowed = asyncio.run(handler(_message(3)))
    assert allowed is False
    assert calls == []
    assert transport.texts(1003) == [messages.ACCESS_UPGRADE_REQUIRED.format(badge="🚀")]


def test_requires_feature_passes_access_to_handler(access):
    transport = MockTransport()
    calls = []

    @access.requires_feature("booking_system", transport)
    async def handler(message, result):
        calls.append((message.chat.id, result.user_tier))

    assert asyncio.run(handler(_message(4))) is True
    assert calls == [(1004, Tier.VIP)]
    assert transport.sent == []
