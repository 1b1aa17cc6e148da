"""Rate-limited logging and logging of state changes."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")


class _SupportsLog(Protocol):
    def log(self, level: int, msg: str, *args: Any) -> Any: ...


class RateLimitedLogger:
    """Emits at most one record per interval and reports how many were skipped."""

    def __init__(
        self,
        logger: _SupportsLog,
        interval_ms: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._logger = logger
        self._interval = interval_ms / 1000
        self._clock = clock
        self._last: float | None = None
        self._events = 0
        self._lock = threading.Lock()

    def log(self, level: int, msg: str, *args: Any) -> bool:
        """Log unless the previous record was too recent; return whether it was emitted."""
        with self._lock:
            self._events += 1
            now = self._clock()
            if self._last is not None and now - self._last <= self._interval:
                return False
            self._last = now
            skipped = self._events - 1
            self._events = 0
        self._logger.log(level, f"{msg} [skipped_logs=%d]", *args, skipped)
        return True


def log_if_changed(
    logger: _SupportsLog,
    level: int,
    name: str,
    obj: T,
    calc: Callable[[T], Any],
    change: Callable[[T], Any],
) -> bool:
    """Apply ``change`` to ``obj`` and log if ``calc(obj)`` differs afterwards."""
    before = calc(obj)
    change(obj)
    after = calc(obj)
    if before == after:
        return False
    logger.log(level, "%s changed: before=%r after=%r", name, before, after)
    return True