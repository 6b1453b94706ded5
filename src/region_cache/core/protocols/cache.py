"""Region cache protocol.

ONLY region cache contract - the interface the owning framework drives.
"""

from typing import Any, Optional
from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class Cache(Protocol):
    """Region cache protocol.

    Defines the per-region cache contract:
    - Basic operations (get, put, remove)
    - Whole-region invalidation (clear, destroy)
    - Lock hooks, which implementations may leave as no-ops
    - Version stamps for optimistic concurrency
    """

    def get(self, key: Any) -> Optional[Any]:
        """Get a cached value, None when absent."""
        ...

    def put(self, key: Any, value: Any) -> None:
        """Cache a value. Raises InvalidCacheArgument on None key or value."""
        ...

    def remove(self, key: Any) -> None:
        """Remove a cached value. Raises InvalidCacheArgument on None key."""
        ...

    def clear(self) -> None:
        """Invalidate every value of the region."""
        ...

    def destroy(self) -> None:
        """Release the region."""
        ...

    def lock(self, key: Any) -> None:
        """Lock a key."""
        ...

    def unlock(self, key: Any) -> None:
        """Unlock a key."""
        ...

    def next_timestamp(self) -> int:
        """Get the next version stamp."""
        ...

    @property
    def timeout(self) -> int:
        """Lock wait timeout, in version stamp units."""
        ...

    @property
    def region_name(self) -> str:
        """Region identity."""
        ...
