"""Command dispatcher: quiz routing first, then plain and tier-gated commands."""
import asyncio
from types import SimpleNamespace

from moneyflow import messages
from moneyflow.jobs.tasks import FollowUpScheduler
from moneyflow.models.types import Tier
from moneyflow.schemas.telegram import Message
from moneyflow.services.access_control import AccessControl
from moneyflow.services.dispatcher import CommandDispatcher, command_of
from moneyflow.services.financial_quiz import FinancialQuiz
from moneyflow.services.quiz_session_store import QuizSessionStore
from moneyflow.transport.mock_impl import MockTransport


class FakeUserStore:
    def __init__(self, users=None):
        self.users = users or {}
        self.registered = []

    def find_one(self, telegram_id):
        return self.users.get(telegram_id)

    def register(self, telegram_id, first_name=None):
        self.registered.append((telegram_id, first_name))
        user = SimpleNamespace(is_paid=False, tier=None, tier_price=None, payment_date=None)
        self.users.setdefault(telegram_id, user)
        return user


def _dispatcher(users=None):
    transport = MockTransport()
    store = FakeUserStore(users)
    quiz = FinancialQuiz(QuizSessionStore(), transport, FollowUpScheduler(), follow_up_delay_seconds=0)
    return CommandDispatcher(quiz, AccessControl(store), transport, registrar=store), transport, store


def _message(text, user_id=10, first_name="Sok"):
    return Message.model_validate(
        {"message_id": 1, "chat": {"id": user_id}, "from": {"id": user_id, "first_name": first_name}, "text": text}
    )


def test_command_of():
    assert command_of("/help") == "/help"
    assert command_of("  /Help@MoneyFlowBot extra ") == "/help"
    assert command_of("hello") is None
    assert command_of(None) is None


def test_start_registers_and_welcomes():
    dispatcher, transport, store = _dispatcher()
    assert asyncio.run(dispatcher.dispatch(_message("/start"))) is True
    assert store.registered == [(10, "Sok")]
    assert transport.texts(10) == [messages.WELCOME]


def test_quiz_keyword_starts_quiz():
    dispatcher, transport, _ = _dispatcher()
    assert asyncio.run(dispatcher.dispatch(_message("/financial_quiz"))) is True
    assert transport.texts(10) == [messages.QUIZ_INTRO]
    assert dispatcher.quiz.store.has(10)


def test_mid_quiz_text_goes_to_quiz():
    dispatcher, transport, _ = _dispatcher()

    async def run():
        await dispatcher.dispatch(_message("ready"))
        await dispatcher.dispatch(_message("/help"))

    asyncio.run(run())
    assert transport.texts(10)[-1] == messages.QUIZ_INVALID_ANSWER.format(count=4)


def test_help_uses_tier():
    users = {10: SimpleNamespace(is_paid=True, tier="vip", tier_price=None, payment_date=None)}
    dispatcher, transport, _ = _dispatcher(users)
    assert asyncio.run(dispatcher.dispatch(_message("/help"))) is True
    help_text = "\n".join(transport.texts(10))
    assert "/book_session" in help_text


def test_whoami_free_and_paid():
    users = {11: SimpleNamespace(is_paid=True, tier="premium", tier_price=97, payment_date=None)}
    dispatcher, transport, _ = _dispatcher(users)
    asyncio.run(dispatcher.dispatch(_message("/whoami", user_id=10)))
    asyncio.run(dispatcher.dispatch(_message("/whoami", user_id=11)))
    free_text = transport.texts(10)[0]
    paid_text = transport.texts(11)[0]
    assert messages.WHOAMI_UNPAID in free_text
    assert "Free" in free_text
    assert messages.WHOAMI_PAID in paid_text
    assert "Premium" in paid_text
    assert "$97" in paid_text


def test_support_message_by_tier():
    users = {10: SimpleNamespace(is_paid=True, tier="vip", tier_price=None, payment_date=None)}
    dispatcher, transport, _ = _dispatcher(users)
    asyncio.run(dispatcher.dispatch(_message("/support")))
    assert transport.texts(10) == [messages.TIER_SUPPORT[Tier.VIP]]


def test_gated_command_denied_for_unpaid_user():
    dispatcher, transport, _ = _dispatcher({10: SimpleNamespace(is_paid=False, tier=None)})
    assert asyncio.run(dispatcher.dispatch(_message("/day3"))) is True
    assert transport.texts(10) == [messages.ACCESS_NOT_PAID]


def test_gated_command_granted():
    users = {10: SimpleNamespace(is_paid=True, tier="premium", tier_price=None, payment_date=None)}
    dispatcher, transport, _ = _dispatcher(users)
    asyncio.run(dispatcher.dispatch(_message("/admin_contact")))
    text = transport.texts(10)[0]
    assert "admin_access" in text
    assert messages.TIER_SUPPORT[Tier.PREMIUM] in text


def test_unknown_text_not_handled():
    dispatcher, transport, _ = _dispatcher()
    assert asyncio.run(dispatcher.dispatch(_message("what's up"))) is False
    assert asyncio.run(dispatcher.dispatch(_message("/unknown"))) is False
    assert transport.sent == []
