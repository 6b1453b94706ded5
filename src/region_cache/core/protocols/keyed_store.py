"""Keyed store protocol.

ONLY backing store contract - the shared, thread-safe keyed store a
region cache delegates physical storage to.
"""

from typing import Any, Optional
from typing_extensions import Protocol, runtime_checkable

from ..value_objects.store_item_policy import StoreItemPolicy


@runtime_checkable
class KeyedStore(Protocol):
    """Keyed store protocol.

    Implementations must be safe to share across threads and must honor
    ``StoreItemPolicy.depends_on``: once a dependency key is removed or
    replaced, every item bound to it is unreachable.
    """

    def get(self, key: str) -> Optional[Any]:
        """Get a live value, None if missing, expired or invalidated.

        Refreshes the sliding deadline of the item.
        """
        ...

    def set(self, key: str, value: Any, policy: Optional[StoreItemPolicy] = None) -> None:
        """Insert or replace an item."""
        ...

    def add(self, key: str, value: Any, policy: Optional[StoreItemPolicy] = None) -> bool:
        """Insert an item unless a live one exists.

        Returns True if inserted, False if the key was already present.
        """
        ...

    def remove(self, key: str) -> Optional[Any]:
        """Remove an item, returning its value or None if it was absent."""
        ...

    def contains(self, key: str) -> bool:
        """Check if a live item exists without refreshing it."""
        ...
