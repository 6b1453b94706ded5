"""Expiration policy value object.

ONLY TTL handling - absolute, sliding and never-expire policies expressed
against the store's monotonic clock.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional


class ExpirationMode(Enum):
    """How a stored item expires."""

    NEVER = "never"          # Lives until removed
    ABSOLUTE = "absolute"    # Fixed deadline set at write time
    SLIDING = "sliding"      # Deadline pushed back on every read


@dataclass(frozen=True)
class ExpirationPolicy:
    """Expiration policy value object.

    An absolute policy yields a deadline of ``now + window`` that never
    moves. A sliding policy yields the same initial deadline but every
    successful read moves it to ``read_time + window``. An item is expired
    once the clock reaches its deadline.
    """

    mode: ExpirationMode
    window: Optional[timedelta] = None

    def __post_init__(self):
        """Validate policy."""
        if self.mode is ExpirationMode.NEVER:
            if self.window is not None:
                raise ValueError("Never-expire policy cannot have a window")
            return

        if self.window is None:
            raise ValueError(f"{self.mode.value} expiration requires a window")

        if self.window < timedelta(0):
            raise ValueError("Expiration window cannot be negative")

    @classmethod
    def never(cls) -> "ExpirationPolicy":
        """Create policy that never expires."""
        return cls(ExpirationMode.NEVER)

    @classmethod
    def absolute(cls, window: timedelta) -> "ExpirationPolicy":
        """Create policy with a fixed deadline."""
        return cls(ExpirationMode.ABSOLUTE, window)

    @classmethod
    def sliding(cls, window: timedelta) -> "ExpirationPolicy":
        """Create policy whose deadline is refreshed on access."""
        return cls(ExpirationMode.SLIDING, window)

    @classmethod
    def for_region(cls, expiration: timedelta, use_sliding_expiration: bool) -> "ExpirationPolicy":
        """Create the policy applied to every entry of a region."""
        if use_sliding_expiration:
            return cls.sliding(expiration)
        return cls.absolute(expiration)

    @property
    def is_sliding(self) -> bool:
        return self.mode is ExpirationMode.SLIDING

    @property
    def never_expires(self) -> bool:
        return self.mode is ExpirationMode.NEVER

    def initial_deadline(self, now: float) -> Optional[float]:
        """Deadline for an item written at ``now``, None if it never expires."""
        if self.window is None:
            return None
        return now + self.window.total_seconds()

    def refreshed_deadline(self, deadline: Optional[float], now: float) -> Optional[float]:
        """Deadline after a successful read at ``now``."""
        if self.is_sliding:
            return self.initial_deadline(now)
        return deadline

    def __str__(self) -> str:
        if self.window is None:
            return "never expires"
        return f"{self.mode.value} {int(self.window.total_seconds())}s"
