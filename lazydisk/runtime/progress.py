"""Single-slot progress relay from the scan worker to the control thread.

Only the latest value matters, so intermediate percentages are coalesced.
100 is reserved for completion and is published strictly after the worker
has finished all scanning work.
"""

from __future__ import annotations

import threading

COMPLETE_PERCENT = 100
_MAX_RUNNING_PERCENT = COMPLETE_PERCENT - 1


class ProgressChannel:
    """Monotonic integer percentage shared by one producer and one reader."""

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._value = 0
        self._done = False

    def publish(self, percent: int) -> None:
        """Record a running percentage; never decreases and never reaches 100."""
        clamped = max(0, min(_MAX_RUNNING_PERCENT, int(percent)))
        with self._condition:
            if self._done or clamped <= self._value:
                return
            self._value = clamped
            self._condition.notify_all()

    def complete(self) -> None:
        """Mark the producer finished and publish the final 100."""
        with self._condition:
            self._value = COMPLETE_PERCENT
            self._done = True
            self._condition.notify_all()

    def latest(self) -> int:
        """Return the most recent value without blocking."""
        with self._condition:
            return self._value

    @property
    def done(self) -> bool:
        with self._condition:
            return self._done

    def wait_for_change(self, last_seen: int, timeout: float) -> int:
        """Block until the value differs from ``last_seen`` or ``timeout`` elapses.

        Returns the latest value either way, so callers poll with a bounded
        wake period and never block indefinitely.
        """
        with self._condition:
            self._condition.wait_for(lambda: self._value != last_seen, timeout=max(0.0, timeout))
            return self._value


__all__ = ["COMPLETE_PERCENT", "ProgressChannel"]
