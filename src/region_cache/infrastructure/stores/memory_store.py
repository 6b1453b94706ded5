"""Memory store.

ONLY in-memory keyed storage - process-wide, thread-safe store with
per-item expiration, dependency invalidation and removal callbacks.
Regions delegate physical storage to it through the KeyedStore protocol.
"""

import itertools
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...core.value_objects.removal_notice import RemovalNotice, RemovalReason
from ...core.value_objects.store_item_policy import RemovedCallback, StoreItemPolicy

logger = logging.getLogger(__name__)

# Never issued to a stored item
_MISSING_STAMP = 0

# Minimum number of writes between two full sweeps of dead items
SWEEP_INTERVAL = 1024

PendingRemoval = Tuple[Optional[RemovedCallback], RemovalNotice]


@dataclass
class StoredItem:
    """Physical store slot."""

    value: Any
    policy: StoreItemPolicy
    deadline: Optional[float]
    stamp: int
    dependency_stamps: Dict[str, int] = field(default_factory=dict)

    def is_expired(self, now: float) -> bool:
        return self.deadline is not None and now >= self.deadline


class MemoryStore:
    """Thread-safe in-memory keyed store.

    Features:
    - Absolute, sliding and never-expire items
    - Dependencies: an item bound to another key becomes unreachable as
      soon as that key is removed, replaced or expires
    - Removal callbacks with a reason, run outside the store lock
    - Statistics

    Invalidated items are occluded on read and dropped lazily, so removing
    a key that thousands of items depend on costs the same as removing
    any other key. Dead items nobody reads again are reclaimed by a full
    sweep once the writes since the last sweep reach the sweep interval
    and the number of items that sweep left behind, which keeps the sweep
    cost amortised constant per write. ``len()`` and ``get_stats()`` sweep
    too.
    """

    _default: Optional["MemoryStore"] = None
    _default_lock = threading.Lock()

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: int = SWEEP_INTERVAL
    ):
        """Initialize memory store.

        Args:
            clock: Monotonic clock in seconds used for every deadline
            sweep_interval: Minimum writes between two sweeps of dead items
        """
        if sweep_interval < 1:
            raise ValueError("Sweep interval must be at least one write")

        self._items: Dict[str, StoredItem] = {}
        self._clock = clock
        self._lock = threading.RLock()
        self._stamps = itertools.count(_MISSING_STAMP + 1)
        self._sweep_interval = sweep_interval
        self._writes_since_sweep = 0
        self._sweep_threshold = sweep_interval
        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "removals": 0,
            "evictions": 0,
            "expired_cleanups": 0,
            "invalidations": 0,
            "sweeps": 0,
        }

    @classmethod
    def default(cls) -> "MemoryStore":
        """Process-wide shared store."""
        with cls._default_lock:
            if cls._default is None:
                cls._default = cls()
            return cls._default

    def now(self) -> float:
        """Current store time."""
        return self._clock()

    def get(self, key: str) -> Optional[Any]:
        """Get a live value, refreshing its sliding deadline."""
        pending: List[PendingRemoval] = []
        with self._lock:
            now = self._clock()
            item = self._live_item(key, now, pending)
            if item is None:
                self._stats["misses"] += 1
                value = None
            else:
                item.deadline = item.policy.expiration.refreshed_deadline(item.deadline, now)
                self._stats["hits"] += 1
                value = item.value
        self._dispatch(pending)
        return value

    def contains(self, key: str) -> bool:
        """Check if a live item exists without refreshing it."""
        pending: List[PendingRemoval] = []
        with self._lock:
            found = self._live_item(key, self._clock(), pending) is not None
        self._dispatch(pending)
        return found

    def set(self, key: str, value: Any, policy: Optional[StoreItemPolicy] = None) -> None:
        """Insert or replace an item."""
        pending: List[PendingRemoval] = []
        with self._lock:
            now = self._clock()
            self._drop(key, RemovalReason.REPLACED, now, pending)
            self._insert(key, value, policy or StoreItemPolicy(), now, pending)
        self._dispatch(pending)

    def add(self, key: str, value: Any, policy: Optional[StoreItemPolicy] = None) -> bool:
        """Insert an item unless a live one exists.

        Returns:
            True if inserted, False if a live item already holds the key
        """
        pending: List[PendingRemoval] = []
        with self._lock:
            now = self._clock()
            if self._live_item(key, now, pending) is not None:
                inserted = False
            else:
                inserted = self._insert(key, value, policy or StoreItemPolicy(), now, pending)
        self._dispatch(pending)
        return inserted

    def remove(self, key: str) -> Optional[Any]:
        """Remove an item, returning its value or None if it was absent."""
        pending: List[PendingRemoval] = []
        with self._lock:
            value = self._drop(key, RemovalReason.REMOVED, self._clock(), pending)
        self._dispatch(pending)
        return value

    def evict(self, key: str) -> bool:
        """Drop an item as if the store reclaimed it under memory pressure."""
        pending: List[PendingRemoval] = []
        with self._lock:
            item = self._items.pop(key, None)
            if item is not None:
                self._stats["evictions"] += 1
                pending.append(self._removal(key, item, RemovalReason.EVICTED))
        self._dispatch(pending)
        return item is not None

    def cleanup_expired(self) -> int:
        """Physically drop every expired or invalidated item."""
        pending: List[PendingRemoval] = []
        with self._lock:
            self._sweep(self._clock(), pending)
        self._dispatch(pending)
        return len(pending)

    def clear(self) -> None:
        """Remove every item."""
        pending: List[PendingRemoval] = []
        with self._lock:
            for key, item in self._items.items():
                pending.append(self._removal(key, item, RemovalReason.REMOVED))
            self._stats["removals"] += len(self._items)
            self._items.clear()
        self._dispatch(pending)

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics, after dropping dead items."""
        pending: List[PendingRemoval] = []
        with self._lock:
            self._sweep(self._clock(), pending)

            total_requests = self._stats["hits"] + self._stats["misses"]
            hit_rate = (self._stats["hits"] / total_requests * 100) if total_requests > 0 else 0.0

            stats = {
                **self._stats,
                "resident_keys": len(self._items),
                "hit_rate_percent": hit_rate,
                "total_requests": total_requests,
            }
        self._dispatch(pending)
        return stats

    @property
    def resident_count(self) -> int:
        """Number of physically resident items, live or not. Does not sweep."""
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        """Number of live items, after dropping dead ones."""
        pending: List[PendingRemoval] = []
        with self._lock:
            self._sweep(self._clock(), pending)
            count = len(self._items)
        self._dispatch(pending)
        return count

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def _live_item(
        self,
        key: str,
        now: float,
        pending: List[PendingRemoval]
    ) -> Optional[StoredItem]:
        """Return the item if live, otherwise drop it and record why."""
        item = self._items.get(key)
        if item is None:
            return None

        reason = self._invalid_reason(item, now, pending)
        if reason is None:
            return item

        del self._items[key]
        if reason is RemovalReason.EXPIRED:
            self._stats["expired_cleanups"] += 1
        else:
            self._stats["invalidations"] += 1
        pending.append(self._removal(key, item, reason))
        return None

    def _invalid_reason(
        self,
        item: StoredItem,
        now: float,
        pending: List[PendingRemoval]
    ) -> Optional[RemovalReason]:
        """Why an item is no longer live, None if it is."""
        if item.is_expired(now):
            return RemovalReason.EXPIRED

        for dependency, stamp in item.dependency_stamps.items():
            dependency_item = self._live_item(dependency, now, pending)
            if dependency_item is None or dependency_item.stamp != stamp:
                return RemovalReason.DEPENDENCY_CHANGED

        return None

    def _insert(
        self,
        key: str,
        value: Any,
        policy: StoreItemPolicy,
        now: float,
        pending: List[PendingRemoval]
    ) -> bool:
        """Store an item bound to the current version of its dependencies."""
        dependency_stamps = {}
        for dependency in policy.depends_on:
            dependency_item = self._live_item(dependency, now, pending)
            if dependency_item is None:
                logger.debug("Dependency '%s' missing, discarding '%s'", dependency, key)
                self._stats["invalidations"] += 1
                pending.append((
                    policy.removed_callback,
                    RemovalNotice(key, value, RemovalReason.DEPENDENCY_CHANGED),
                ))
                return False
            dependency_stamps[dependency] = dependency_item.stamp

        self._items[key] = StoredItem(
            value=value,
            policy=policy,
            deadline=policy.expiration.initial_deadline(now),
            stamp=next(self._stamps),
            dependency_stamps=dependency_stamps,
        )
        self._stats["sets"] += 1

        self._writes_since_sweep += 1
        if self._writes_since_sweep >= self._sweep_threshold:
            self._sweep(now, pending)
        return True

    def _sweep(self, now: float, pending: List[PendingRemoval]) -> None:
        """Drop every expired or invalidated item."""
        for key in list(self._items):
            # Checking a dependent may already have dropped this key
            if key in self._items:
                self._live_item(key, now, pending)
        self._writes_since_sweep = 0
        self._sweep_threshold = max(self._sweep_interval, len(self._items))
        self._stats["sweeps"] += 1

    def _drop(
        self,
        key: str,
        reason: RemovalReason,
        now: float,
        pending: List[PendingRemoval]
    ) -> Optional[Any]:
        """Remove an item, returning its value if it was live."""
        item = self._live_item(key, now, pending)
        if item is None:
            return None

        del self._items[key]
        self._stats["removals"] += 1
        pending.append(self._removal(key, item, reason))
        return item.value

    @staticmethod
    def _removal(key: str, item: StoredItem, reason: RemovalReason) -> PendingRemoval:
        return item.policy.removed_callback, RemovalNotice(key, item.value, reason)

    @staticmethod
    def _dispatch(pending: List[PendingRemoval]) -> None:
        """Run removal callbacks, after the store lock is released."""
        for callback, notice in pending:
            if callback is None:
                continue
            try:
                callback(notice)
            except Exception:
                logger.exception(
                    "Removal callback failed for '%s' (%s)", notice.key, notice.reason.value
                )


# Factory function for dependency injection
def create_memory_store(
    clock: Callable[[], float] = time.monotonic,
    sweep_interval: int = SWEEP_INTERVAL
) -> MemoryStore:
    """Create memory store.

    Args:
        clock: Monotonic clock in seconds
        sweep_interval: Minimum writes between two sweeps of dead items

    Returns:
        Configured memory store
    """
    return MemoryStore(clock=clock, sweep_interval=sweep_interval)
