"""
Mock transport: records messages instead of sending them. Used when TELEGRAM_BOT_TOKEN is not set and in tests.
"""
import logging

from moneyflow.transport.base import MessageSendError

logger = logging.getLogger(__name__)


class MockTransport:
    """Keeps every sent message as (chat_id, text, options). fail_on makes the n-th send (1-based) raise."""

    def __init__(self, fail_on: int | None = None, error: Exception | None = None):
        self.sent: list[tuple[int, str, dict]] = []
        self.fail_on = fail_on
        self.error = error
        self._calls = 0

    async def send_message(self, chat_id: int, text: str, **options) -> None:
        self._calls += 1
        if self.fail_on is not None and self._calls == self.fail_on:
            raise self.error or MessageSendError("mock send failure")
        self.sent.append((chat_id, text, options))
        logger.debug("[mock] message to chat %s (%s chars)", chat_id, len(text))

    def texts(self, chat_id: int | None = None) -> list[str]:
        return [t for c, t, _ in self.sent if chat_id is None or c == chat_id]


def get_mock_transport() -> MockTransport:
    return MockTransport()
