"""Pytest configuration and fixtures for region-cache tests."""

import pytest

from region_cache.application.services.region_cache import RegionCache
from region_cache.config.settings import RegionCacheSettings
from region_cache.infrastructure.stores.memory_store import MemoryStore
from region_cache.infrastructure.timestamps.timestamper import Timestamper


class ManualClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Manual clock driving the store's deadlines."""
    return ManualClock()


@pytest.fixture
def store(clock):
    """Fresh memory store on the manual clock."""
    return MemoryStore(clock=clock)


@pytest.fixture
def settings():
    """Settings pinned to the documented defaults, independent of the environment."""
    return RegionCacheSettings(
        default_expiration=300,
        use_sliding_expiration=False,
        region_prefix="",
        key_prefix="RegionCache:",
        _env_file=None,
    )


@pytest.fixture
def timestamper():
    """Timestamper on a frozen wall clock."""
    return Timestamper(clock=lambda: 1_700_000_000.0)


@pytest.fixture
def make_region(store, settings, timestamper):
    """Factory for regions sharing the test store."""
    def _make(name="r1", properties=None):
        return RegionCache(
            name,
            properties,
            store=store,
            timestamper=timestamper,
            settings=settings,
        )
    return _make


@pytest.fixture
def region(make_region):
    """Region 'r1' with 300s absolute expiration."""
    return make_region("r1", {"expiration": "300"})
