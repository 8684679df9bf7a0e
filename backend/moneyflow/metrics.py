"""
In-process counters for observability. Process-local; for multi-worker use external metrics (e.g. Prometheus).
"""
import threading
from collections import Counter

# quiz_starts_total, quiz_completions_total, message_send_failures_total, follow_up_failures_total
_counters: Counter[str] = Counter()
_counters_lock = threading.Lock()


def increment_counter(name: str) -> int:
    """Increment a named counter; return new value. Thread-safe."""
    with _counters_lock:
        _counters[name] += 1
        return _counters[name]


def get_counter(name: str) -> int:
    with _counters_lock:
        return _counters[name]


def snapshot() -> dict[str, int]:
    """Copy of all counters (for /health)."""
    with _counters_lock:
        return dict(_counters)
