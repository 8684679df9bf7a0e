"""
Telegram Bot API transport: POST {api_base}/bot{token}/sendMessage via httpx.
"""
import logging

import httpx

from moneyflow.config import settings
from moneyflow.transport.base import MessageSendError

logger = logging.getLogger(__name__)


def _is_retryable_status(status_code: int) -> bool:
    """429 (flood control) and 5xx are worth retrying; other 4xx are caller errors."""
    return status_code == 429 or status_code >= 500


class TelegramTransport:
    """Sends messages through the Bot API. Pass client to share a connection pool (or an httpx.MockTransport in tests)."""

    def __init__(
        self,
        token: str,
        api_base: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        if not token:
            raise ValueError("Telegram bot token is required")
        base = (api_base or settings.telegram_api_base).rstrip("/")
        self._url = f"{base}/bot{token}/sendMessage"
        self._client = client or httpx.AsyncClient(timeout=timeout or settings.telegram_timeout_seconds)
        self._owns_client = client is None

    async def send_message(self, chat_id: int, text: str, **options) -> None:
        payload = {"chat_id": chat_id, "text": text, **options}
        try:
            response = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as e:
            # Network errors and timeouts
            raise MessageSendError(f"Telegram request failed: {e}", retryable=True) from e

        if response.status_code != 200:
            description = _error_description(response)
            logger.warning("Telegram sendMessage %s for chat %s: %s", response.status_code, chat_id, description)
            raise MessageSendError(
                f"Telegram sendMessage failed ({response.status_code}): {description}",
                status_code=response.status_code,
                retryable=_is_retryable_status(response.status_code),
            )
        try:
            data = response.json()
        except ValueError as e:
            raise MessageSendError("Telegram sendMessage returned non-JSON body", status_code=200) from e
        if not data.get("ok", False):
            raise MessageSendError(
                f"Telegram sendMessage not ok: {data.get('description') or 'unknown error'}",
                status_code=response.status_code,
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_description(response: httpx.Response) -> str:
    try:
        return str(response.json().get("description") or response.text)
    except ValueError:
        return response.text[:200]


def get_telegram_transport() -> TelegramTransport:
    return TelegramTransport(settings.telegram_bot_token)
