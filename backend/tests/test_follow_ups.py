"""Deferred follow-up scheduling: delivery, failure isolation, retry on transient errors."""
import asyncio

from moneyflow import metrics
from moneyflow.jobs import tasks
from moneyflow.jobs.tasks import FollowUpScheduler
from moneyflow.transport.base import MessageSendError
from moneyflow.transport.mock_impl import MockTransport


class FlakyTransport:
    """Fails with a retryable error the first `failures` times."""

    def __init__(self, failures):
        self.failures = failures
        self.sent = []

    async def send_message(self, chat_id, text, **options):
        if self.failures:
            self.failures -= 1
            raise MessageSendError("429", status_code=429, retryable=True)
        self.sent.append((chat_id, text))


def test_follow_up_delivered_after_drain():
    transport = MockTransport()
    scheduler = FollowUpScheduler()

    async def run():
        scheduler.schedule(transport, 5, "later", delay_seconds=0.01)
        assert transport.sent == []
        await scheduler.drain()

    asyncio.run(run())
    assert transport.texts(5) == ["later"]
    assert scheduler.pending == 0


def test_follow_up_failure_is_logged_not_raised(caplog):
    transport = MockTransport(fail_on=1, error=MessageSendError("chat not found", status_code=400))
    scheduler = FollowUpScheduler()
    before = metrics.get_counter("follow_up_failures_total")

    async def run():
        task = scheduler.schedule(transport, 5, "later", delay_seconds=0)
        await scheduler.drain()
        return task

    with caplog.at_level("ERROR", logger="moneyflow.jobs.follow_ups"):
        task = asyncio.run(run())
    assert task.exception() is None
    assert metrics.get_counter("follow_up_failures_total") == before + 1
    assert any("Follow-up to chat 5 failed" in r.getMessage() for r in caplog.records)


def test_follow_up_retries_transient_errors(monkeypatch):
    # No real backoff in tests
    monkeypatch.setattr(tasks, "wait_exponential", lambda **kwargs: (lambda retry_state: 0))
    transport = FlakyTransport(failures=2)
    scheduler = FollowUpScheduler(max_attempts=3)

    async def run():
        scheduler.schedule(transport, 8, "hi", delay_seconds=0)
        await scheduler.drain()

    asyncio.run(run())
    assert transport.sent == [(8, "hi")]
