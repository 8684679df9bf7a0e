"""
Message transport interface: send one text message to a chat.
Implementations raise MessageSendError on failure; retryable marks rate limits and server errors.
"""
from typing import Protocol


class MessageSendError(Exception):
    """A send did not go through."""

    def __init__(self, message: str, status_code: int | None = None, retryable: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable


class MessageTransport(Protocol):
    """Anything that can deliver a text message to a chat (Telegram in production, mock in tests)."""

    async def send_message(self, chat_id: int, text: str, **options) -> None:
        """Send text to chat_id. options are passed through (e.g. parse_mode, reply_markup)."""
        ...
