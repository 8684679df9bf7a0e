"""
Shared dependencies: webhook secret check and the bot's long-lived services.
Quiz sessions, the transport and the follow-up scheduler are process singletons built at import,
so concurrent first requests in the threadpool all share them; tests override these.
"""
import logging

from fastapi import Depends, Header, HTTPException, status

from moneyflow.config import settings
from moneyflow.jobs.tasks import FollowUpScheduler
from moneyflow.services.access_control import AccessControl
from moneyflow.services.dispatcher import CommandDispatcher
from moneyflow.services.financial_quiz import FinancialQuiz
from moneyflow.services.quiz_session_store import QuizSessionStore
from moneyflow.services.user_store import SqlUserStore
from moneyflow.transport import MessageTransport, get_message_transport

logger = logging.getLogger(__name__)


def verify_webhook_secret(
    x_telegram_bot_api_secret_token: str | None = Header(default=None),
) -> None:
    """Require Telegram's secret header when TELEGRAM_WEBHOOK_SECRET is configured; 401 otherwise."""
    expected = (settings.telegram_webhook_secret or "").strip()
    if not expected:
        return
    if (x_telegram_bot_api_secret_token or "") != expected:
        logger.warning("Webhook call rejected: bad or missing secret token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook secret")


_transport = get_message_transport()
_session_store = QuizSessionStore(ttl_seconds=settings.session_ttl)
_follow_up_scheduler = FollowUpScheduler()


def get_transport() -> MessageTransport:
    return _transport


def get_session_store() -> QuizSessionStore:
    return _session_store


def get_follow_up_scheduler() -> FollowUpScheduler:
    return _follow_up_scheduler


def get_user_store() -> SqlUserStore:
    return SqlUserStore()


def get_access_control(user_store: SqlUserStore = Depends(get_user_store)) -> AccessControl:
    return AccessControl(user_store)


def get_quiz(
    store: QuizSessionStore = Depends(get_session_store),
    transport: MessageTransport = Depends(get_transport),
    scheduler: FollowUpScheduler = Depends(get_follow_up_scheduler),
) -> FinancialQuiz:
    return FinancialQuiz(store, transport, scheduler)


def get_dispatcher(
    quiz: FinancialQuiz = Depends(get_quiz),
    access: AccessControl = Depends(get_access_control),
    transport: MessageTransport = Depends(get_transport),
    user_store: SqlUserStore = Depends(get_user_store),
) -> CommandDispatcher:
    return CommandDispatcher(quiz, access, transport, registrar=user_store)
