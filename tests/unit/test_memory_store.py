"""Tests for the in-memory keyed store."""

import logging
from datetime import timedelta

import pytest

from region_cache.core.protocols import KeyedStore
from region_cache.core.value_objects.expiration_policy import ExpirationPolicy
from region_cache.core.value_objects.removal_notice import RemovalReason
from region_cache.core.value_objects.store_item_policy import StoreItemPolicy
from region_cache.infrastructure.stores.memory_store import MemoryStore, create_memory_store


def absolute(seconds):
    return StoreItemPolicy(expiration=ExpirationPolicy.absolute(timedelta(seconds=seconds)))


def sliding(seconds):
    return StoreItemPolicy(expiration=ExpirationPolicy.sliding(timedelta(seconds=seconds)))


class TestBasicOperations:
    """Test cases for get/set/add/remove."""

    def test_implements_protocol(self, store):
        """Test MemoryStore satisfies KeyedStore."""
        assert isinstance(store, KeyedStore)

    def test_set_and_get(self, store):
        """Test values round-trip."""
        store.set("k", "v")

        assert store.get("k") == "v"
        assert store.contains("k")
        assert "k" in store
        assert store.get("missing") is None

    def test_set_replaces(self, store):
        """Test set overwrites."""
        store.set("k", 1)
        store.set("k", 2)

        assert store.get("k") == 2
        assert len(store) == 1

    def test_add_does_not_overwrite(self, store):
        """Test add keeps a live item."""
        assert store.add("k", 1) is True
        assert store.add("k", 2) is False
        assert store.get("k") == 1

    def test_add_over_expired_item(self, store, clock):
        """Test add succeeds once the previous item expired."""
        store.add("k", 1, absolute(5))
        clock.advance(5)

        assert store.add("k", 2) is True
        assert store.get("k") == 2

    def test_remove(self, store):
        """Test remove returns the value once."""
        store.set("k", "v")

        assert store.remove("k") == "v"
        assert store.remove("k") is None
        assert store.get("k") is None


class TestExpiration:
    """Test cases for absolute and sliding expiration."""

    def test_absolute_boundary(self, store, clock):
        """Test an item is present before its deadline and absent at it."""
        store.set("k", "v", absolute(300))

        clock.advance(299.5)
        assert store.get("k") == "v"

        clock.advance(0.5)
        assert store.get("k") is None

    def test_absolute_ignores_reads(self, store, clock):
        """Test reads do not extend an absolute deadline."""
        store.set("k", "v", absolute(10))

        for _ in range(3):
            clock.advance(3)
            assert store.get("k") == "v"

        clock.advance(1)
        assert store.get("k") is None

    def test_sliding_refreshes_on_read(self, store, clock):
        """Test continuous access keeps a sliding item alive."""
        store.set("k", "v", sliding(10))

        for _ in range(5):
            clock.advance(9)
            assert store.get("k") == "v"

        clock.advance(10)
        assert store.get("k") is None

    def test_contains_does_not_refresh(self, store, clock):
        """Test contains leaves the sliding deadline alone."""
        store.set("k", "v", sliding(10))

        clock.advance(9)
        assert store.contains("k")

        clock.advance(1)
        assert store.get("k") is None

    def test_never_expires(self, store, clock):
        """Test items without policy live forever."""
        store.set("k", "v")
        clock.advance(10 ** 9)

        assert store.get("k") == "v"

    def test_cleanup_expired(self, store, clock):
        """Test expired items are physically dropped on cleanup."""
        store.set("short", 1, absolute(1))
        store.set("long", 2, absolute(100))
        clock.advance(2)

        assert store.resident_count == 2
        assert store.cleanup_expired() == 1
        assert len(store) == 1


class TestDependencies:
    """Test cases for dependency invalidation."""

    def test_removing_dependency_occludes_dependents(self, store):
        """Test dependents vanish when their dependency is removed."""
        store.set("root", "token")
        for i in range(10):
            store.set(f"item{i}", i, StoreItemPolicy(depends_on=("root",)))

        store.remove("root")

        # Dependents are not visited by the removal itself
        assert store.resident_count == 10
        assert all(store.get(f"item{i}") is None for i in range(10))
        assert len(store) == 0

    def test_replacing_dependency_occludes_dependents(self, store):
        """Test a re-set dependency is a different version."""
        store.set("root", "token")
        store.set("item", 1, StoreItemPolicy(depends_on=("root",)))

        store.set("root", "token")

        assert store.get("item") is None

    def test_dependents_written_after_replacement_survive(self, store):
        """Test binding happens to the version current at write time."""
        store.set("root", "token")
        store.set("root", "token2")
        store.set("item", 1, StoreItemPolicy(depends_on=("root",)))

        assert store.get("item") == 1

    def test_missing_dependency_discards_item(self, store):
        """Test an item bound to a missing key is never visible."""
        notices = []
        store.set("item", 1, StoreItemPolicy(depends_on=("root",), removed_callback=notices.append))

        assert store.get("item") is None
        assert len(store) == 0
        assert [n.reason for n in notices] == [RemovalReason.DEPENDENCY_CHANGED]

    def test_expired_dependency(self, store, clock):
        """Test expiry of a dependency invalidates dependents."""
        store.set("root", "token", absolute(5))
        store.set("item", 1, StoreItemPolicy(depends_on=("root",)))
        clock.advance(5)

        assert store.get("item") is None

    def test_chained_dependencies(self, store):
        """Test invalidation propagates through a chain."""
        store.set("a", 1)
        store.set("b", 2, StoreItemPolicy(depends_on=("a",)))
        store.set("c", 3, StoreItemPolicy(depends_on=("b",)))

        store.remove("a")

        assert store.get("c") is None


class TestRemovalCallbacks:
    """Test cases for removal callbacks."""

    def _tracked(self, notices, **kwargs):
        return StoreItemPolicy(removed_callback=notices.append, **kwargs)

    def test_reasons(self, store, clock):
        """Test each removal path reports its reason."""
        notices = []
        store.set("removed", 1, self._tracked(notices))
        store.set("replaced", 1, self._tracked(notices))
        store.set("expired", 1, self._tracked(
            notices, expiration=ExpirationPolicy.absolute(timedelta(seconds=1))
        ))
        store.set("evicted", 1, self._tracked(notices))

        store.remove("removed")
        store.set("replaced", 2)
        clock.advance(1)
        store.get("expired")
        assert store.evict("evicted") is True
        assert store.evict("evicted") is False

        assert [(n.key, n.reason) for n in notices] == [
            ("removed", RemovalReason.REMOVED),
            ("replaced", RemovalReason.REPLACED),
            ("expired", RemovalReason.EXPIRED),
            ("evicted", RemovalReason.EVICTED),
        ]

    def test_dependency_changed_reason(self, store):
        """Test occluded dependents report dependency_changed when dropped."""
        notices = []
        store.set("root", "token")
        store.set("item", 1, self._tracked(notices, depends_on=("root",)))
        store.remove("root")

        store.get("item")

        assert notices[0].reason is RemovalReason.DEPENDENCY_CHANGED
        assert notices[0].value == 1

    def test_clear_notifies(self, store):
        """Test clearing the store notifies every item."""
        notices = []
        store.set("a", 1, self._tracked(notices))
        store.set("b", 2, self._tracked(notices))

        store.clear()

        assert {n.key for n in notices} == {"a", "b"}
        assert len(store) == 0

    def test_callback_can_reenter_store(self, store):
        """Test callbacks run outside the store lock."""
        store.set("a", 1, StoreItemPolicy(removed_callback=lambda n: store.set("seen", n.key)))

        store.remove("a")

        assert store.get("seen") == "a"

    def test_failing_callback_is_logged(self, store, caplog):
        """Test a failing callback does not break the store operation."""
        def explode(notice):
            raise RuntimeError("boom")

        store.set("a", 1, StoreItemPolicy(removed_callback=explode))

        with caplog.at_level(logging.ERROR):
            assert store.remove("a") == 1

        assert "Removal callback failed for 'a'" in caplog.text


class TestReclamation:
    """Test cases for reclaiming items nobody reads again."""

    def test_writes_sweep_expired_items(self, clock):
        """Test residency stays bounded when expired keys are never read."""
        store = MemoryStore(clock=clock, sweep_interval=10)

        for i in range(100):
            store.set(f"k{i}", i, absolute(1))
            clock.advance(2)

        # Every write but the last is long expired
        assert store.resident_count <= 20
        assert store.get_stats()["sweeps"] > 0

    def test_writes_sweep_invalidated_dependents(self, clock):
        """Test dependents of a removed key are reclaimed without reads."""
        store = MemoryStore(clock=clock, sweep_interval=10)
        for generation in range(5):
            root = f"root{generation}"
            store.set(root, generation)
            for i in range(50):
                store.set(f"{root}:item{i}", i, StoreItemPolicy(depends_on=(root,)))
            store.remove(root)

        assert store.resident_count < 150

    def test_sweep_notifies(self, clock):
        """Test swept items report why they left."""
        notices = []
        store = MemoryStore(clock=clock, sweep_interval=2)
        store.set("a", 1, StoreItemPolicy(
            expiration=ExpirationPolicy.absolute(timedelta(seconds=1)),
            removed_callback=notices.append,
        ))
        clock.advance(1)

        store.set("b", 2)

        assert [(n.key, n.reason) for n in notices] == [("a", RemovalReason.EXPIRED)]

    def test_len_and_stats_sweep(self, store, clock):
        """Test len() and get_stats() count only live items."""
        for i in range(20):
            store.set(f"k{i}", i, absolute(1))
        store.set("kept", "v")
        clock.advance(1)

        assert store.resident_count == 21
        assert store.get_stats()["resident_keys"] == 1
        assert len(store) == 1
        assert store.get_stats()["expired_cleanups"] == 20

    def test_invalid_sweep_interval(self, clock):
        """Test the sweep interval must be positive."""
        with pytest.raises(ValueError):
            MemoryStore(clock=clock, sweep_interval=0)


class TestStoreStatistics:
    """Test cases for statistics and defaults."""

    def test_stats(self, store):
        """Test hit and miss accounting."""
        store.set("a", 1)
        store.get("a")
        store.get("a")
        store.get("b")

        stats = store.get_stats()
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["sets"] == 1
        assert stats["resident_keys"] == 1
        assert stats["hit_rate_percent"] == pytest.approx(66.666, rel=1e-3)

    def test_default_is_shared(self):
        """Test the process-wide store is a singleton."""
        assert MemoryStore.default() is MemoryStore.default()

    def test_factory(self, clock):
        """Test factory function."""
        store = create_memory_store(clock=clock)

        assert store.now() == clock.now
