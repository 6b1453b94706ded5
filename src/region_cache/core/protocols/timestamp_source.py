"""Timestamp source protocol.

ONLY version stamps - monotonic counter used by callers for
optimistic-concurrency version stamps.
"""

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class TimestampSource(Protocol):
    """Timestamp source protocol."""

    ONE_MS: int

    def next(self) -> int:
        """Return a value strictly greater than any previously returned."""
        ...
