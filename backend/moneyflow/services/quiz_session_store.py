"""
In-memory quiz sessions keyed by Telegram user id.

- One session per user; start overwrites (no merge).
- Optional TTL measured from the last change; expired sessions are dropped lazily on access,
  by sweep(), and by create() at most once per TTL interval so abandoned sessions do not pile up.
- Callers get copies; every mutation goes through the store.
"""
import logging
import time
from typing import Callable

from moneyflow.models.types import QuizStage
from moneyflow.schemas.quiz import AnswerValue, QuizSession

logger = logging.getLogger(__name__)


class QuizSessionStore:
    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # user_id -> {"session": QuizSession, "expires_at": float | None}
        self._items: dict[int, dict[str, object]] = {}
        self._last_sweep = clock()

    def _expires_at(self) -> float | None:
        if self.ttl_seconds is None:
            return None
        return self._clock() + self.ttl_seconds

    def _live_item(self, user_id: int) -> dict[str, object] | None:
        item = self._items.get(user_id)
        if item is None:
            return None
        expires_at = item["expires_at"]
        if expires_at is not None and expires_at <= self._clock():
            del self._items[user_id]
            logger.info("Quiz session for user %s expired", user_id)
            return None
        return item

    def _require(self, user_id: int) -> QuizSession:
        item = self._live_item(user_id)
        if item is None:
            raise KeyError(f"no quiz session for user {user_id}")
        item["expires_at"] = self._expires_at()
        return item["session"]  # type: ignore[return-value]

    def create(self, user_id: int) -> QuizSession:
        """Start a fresh session at question 1, replacing any existing one."""
        self._maybe_sweep()
        if user_id in self._items:
            logger.debug("Replacing quiz session for user %s", user_id)
        session = QuizSession(user_id=user_id)
        self._items[user_id] = {"session": session, "expires_at": self._expires_at()}
        return session.model_copy(deep=True)

    def get(self, user_id: int) -> QuizSession | None:
        item = self._live_item(user_id)
        if item is None:
            return None
        return item["session"].model_copy(deep=True)  # type: ignore[union-attr]

    def has(self, user_id: int) -> bool:
        return self._live_item(user_id) is not None

    def mark_ready(self, user_id: int) -> QuizSession:
        """AWAITING_READY -> AWAITING_ANSWER at question 1."""
        session = self._require(user_id)
        session.stage = QuizStage.AWAITING_ANSWER
        session.current_question = 1
        return session.model_copy(deep=True)

    def record_answer(self, user_id: int, question_number: int, value: AnswerValue) -> QuizSession:
        """Store the answer for the current question and advance by exactly one."""
        session = self._require(user_id)
        if session.stage != QuizStage.AWAITING_ANSWER:
            raise ValueError(f"user {user_id} has not started answering")
        if question_number != session.current_question:
            raise ValueError(
                f"answer for question {question_number} but user {user_id} is on {session.current_question}"
            )
        session.answers[f"q{question_number}"] = value
        session.current_question += 1
        return session.model_copy(deep=True)

    def delete(self, user_id: int) -> bool:
        return self._items.pop(user_id, None) is not None

    def sweep(self) -> int:
        """Drop all expired sessions. Returns how many were removed."""
        if self.ttl_seconds is None:
            return 0
        now = self._clock()
        self._last_sweep = now
        expired = [
            uid for uid, item in self._items.items()
            if item["expires_at"] is not None and item["expires_at"] <= now  # type: ignore[operator]
        ]
        for uid in expired:
            del self._items[uid]
        if expired:
            logger.info("Swept %s expired quiz session(s)", len(expired))
        return len(expired)

    def _maybe_sweep(self) -> None:
        if self.ttl_seconds is None:
            return
        now = self._clock()
        if now - self._last_sweep >= self.ttl_seconds:
            self.sweep()

    def __len__(self) -> int:
        return len(self._items)
