"""Telegram transport against httpx.MockTransport (no network)."""
import asyncio
import json

import httpx
import pytest

from moneyflow.transport.base import MessageSendError
from moneyflow.transport.telegram_impl import TelegramTransport


def _transport(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TelegramTransport("test-token", api_base="https://api.test", client=client)


def test_send_message_posts_payload():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})

    transport = _transport(handler)
    asyncio.run(transport.send_message(42, "hello", parse_mode="HTML"))
    assert len(requests) == 1
    assert str(requests[0].url) == "https://api.test/bottest-token/sendMessage"
    assert json.loads(requests[0].content) == {"chat_id": 42, "text": "hello", "parse_mode": "HTML"}


def test_rate_limit_is_retryable_error():
    def handler(request):
        return httpx.Response(429, json={"ok": False, "description": "Too Many Requests: retry after 3"})

    with pytest.raises(MessageSendError) as exc_info:
        asyncio.run(_transport(handler).send_message(1, "x"))
    assert exc_info.value.status_code == 429
    assert exc_info.value.retryable is True
    assert "Too Many Requests" in str(exc_info.value)


def test_bad_request_not_retryable():
    def handler(request):
        return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})

    with pytest.raises(MessageSendError) as exc_info:
        asyncio.run(_transport(handler).send_message(1, "x"))
    assert exc_info.value.retryable is False


def test_network_error_is_retryable():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(MessageSendError) as exc_info:
        asyncio.run(_transport(handler).send_message(1, "x"))
    assert exc_info.value.retryable is True


def test_token_required():
    with pytest.raises(ValueError):
        TelegramTransport("")
