"""
Deferred messages sent as detached asyncio tasks (e.g. the quiz follow-up).
Fire-and-forget: failures are retried on transient errors, then logged here and never reach the caller.
Pending tasks are lost on restart; there is no cancellation.
"""
import asyncio
import logging

from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from moneyflow import metrics
from moneyflow.config import settings
from moneyflow.transport.base import MessageTransport

# Own sink so follow-up failures can be routed separately from request handling
logger = logging.getLogger("moneyflow.jobs.follow_ups")


def _is_retryable(exc: BaseException) -> bool:
    """Retry on rate limit / 5xx / network errors flagged by the transport."""
    return bool(getattr(exc, "retryable", False))


class FollowUpScheduler:
    """Schedules delayed sends on the running event loop and keeps them referenced until done."""

    def __init__(self, max_attempts: int | None = None):
        self.max_attempts = max_attempts or settings.follow_up_max_attempts
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(
        self,
        transport: MessageTransport,
        chat_id: int,
        text: str,
        delay_seconds: float,
    ) -> asyncio.Task:
        """Send text to chat_id after delay_seconds. Must be called from a running event loop."""
        task = asyncio.get_running_loop().create_task(
            self._run(transport, chat_id, text, delay_seconds),
            name=f"follow-up-{chat_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug("Follow-up for chat %s scheduled in %.1fs", chat_id, delay_seconds)
        return task

    async def _run(self, transport: MessageTransport, chat_id: int, text: str, delay_seconds: float) -> None:
        try:
            if delay_seconds > 0:
                await asyncio.sleep(delay_seconds)
            async for attempt in AsyncRetrying(
                retry=retry_if_exception(_is_retryable),
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=30),
                reraise=True,
            ):
                with attempt:
                    await transport.send_message(chat_id, text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            metrics.increment_counter("follow_up_failures_total")
            logger.error("Follow-up to chat %s failed: %s", chat_id, e, exc_info=True)

    async def drain(self) -> None:
        """Wait for every pending follow-up (tests, graceful shutdown)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
