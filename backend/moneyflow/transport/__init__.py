"""
Message transport abstraction: send_message(chat_id, text, **options).
Telegram when TELEGRAM_BOT_TOKEN is set, otherwise the recording mock.
"""
import logging

from moneyflow.config import settings
from moneyflow.transport.base import MessageSendError, MessageTransport

logger = logging.getLogger(__name__)


def get_message_transport() -> MessageTransport:
    """Return Telegram transport; mock only if the bot token is missing."""
    if not (settings.telegram_bot_token or "").strip():
        logger.warning("TELEGRAM_BOT_TOKEN not set; using mock transport (messages are not delivered).")
        from moneyflow.transport.mock_impl import get_mock_transport
        return get_mock_transport()
    from moneyflow.transport.telegram_impl import get_telegram_transport
    return get_telegram_transport()


__all__ = ["MessageSendError", "MessageTransport", "get_message_transport"]
