"""Weakly monotonic timestamp source for error records.

Wall-clock time can jump backwards (NTP adjustments, manual changes), so
timestamps are derived from a wall-clock origin captured once plus the
elapsed ``time.perf_counter()`` duration. Successive calls never go back
in time for the life of the process.

Usage:
    >>> from faultline.domain.clock import now
    >>> first = now()
    >>> first <= now()
    True
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

__all__ = [
    "MonotonicClock",
    "get_clock",
    "now",
    "set_clock",
]


class MonotonicClock:
    """Clock anchored to a wall-clock origin and advanced by perf_counter.
    
    Attributes:
        origin: UTC datetime captured when the clock was created
    """
    
    __slots__ = ("origin", "_perf_origin")
    
    def __init__(self, origin: datetime | None = None) -> None:
        self._perf_origin = time.perf_counter()
        self.origin = origin or datetime.fromtimestamp(time.time(), tz=timezone.utc)
    
    def now(self) -> datetime:
        """Return the current time (UTC, microsecond resolution)."""
        elapsed = time.perf_counter() - self._perf_origin
        return self.origin + timedelta(seconds=elapsed)


_clock = MonotonicClock()


def get_clock() -> MonotonicClock:
    """Return the process-wide clock."""
    return _clock


def set_clock(clock: MonotonicClock) -> MonotonicClock:
    """Replace the process-wide clock, returning the previous one."""
    global _clock
    previous = _clock
    _clock = clock
    return previous


def now() -> datetime:
    """Current timestamp from the process-wide clock."""
    return _clock.now()
