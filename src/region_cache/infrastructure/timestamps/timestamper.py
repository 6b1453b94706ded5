"""Timestamper.

ONLY version stamps - thread-safe, strictly increasing counter built from
wall-clock milliseconds, used for optimistic-concurrency version stamps.
"""

import threading
import time
from typing import Callable, Optional

# Low bits available for stamps issued within the same millisecond
_COUNTER_BITS = 12


class Timestamper:
    """Strictly increasing timestamp source.

    A stamp is ``milliseconds_since_epoch << 12`` plus a counter, so up to
    4096 stamps can be issued per millisecond before borrowing from the
    next one. Stamps never go backwards, even if the wall clock does.
    """

    ONE_MS = 1 << _COUNTER_BITS

    def __init__(self, clock: Callable[[], float] = time.time):
        """Initialize timestamper.

        Args:
            clock: Wall clock in seconds since the epoch
        """
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        """Return the next stamp."""
        with self._lock:
            candidate = int(self._clock() * 1000) << _COUNTER_BITS
            self._last = max(candidate, self._last + 1)
            return self._last

    def to_milliseconds(self, stamp: int) -> int:
        """Wall-clock milliseconds a stamp was issued at."""
        return stamp >> _COUNTER_BITS


_default_timestamper: Optional[Timestamper] = None
_default_lock = threading.Lock()


def get_timestamper() -> Timestamper:
    """Process-wide timestamper."""
    global _default_timestamper
    with _default_lock:
        if _default_timestamper is None:
            _default_timestamper = Timestamper()
        return _default_timestamper
