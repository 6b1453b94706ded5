"""Tests for the region cache provider."""

from datetime import timedelta

import pytest

from region_cache.application.services.cache_provider import (
    RegionCacheProvider,
    create_region_cache_provider,
)
from region_cache.core.exceptions import CacheConfigurationError
from region_cache.infrastructure.configuration.region_properties import RegionPropertiesDocument


@pytest.fixture
def provider(store, timestamper, settings):
    """Provider on the test store."""
    return RegionCacheProvider(store=store, timestamper=timestamper, settings=settings)


class TestRegionCacheProvider:
    """Test cases for RegionCacheProvider."""

    def test_regions_share_store(self, provider, store):
        """Test every region writes to the provider's store."""
        users = provider.build_cache("users")
        orders = provider.build_cache("orders")

        users.put("a", 1)
        orders.put("a", 2)

        assert provider.store is store
        assert users.get("a") == 1
        assert orders.get("a") == 2
        # Two tokens plus two entries
        assert len(store) == 4

    def test_regions_are_memoised(self, provider):
        """Test building an existing region returns it unchanged."""
        first = provider.build_cache("users", {"expiration": "10"})
        second = provider.build_cache("users", {"expiration": "99"})

        assert first is second
        assert second.expiration == timedelta(seconds=10)
        assert set(provider.regions) == {"users"}

    def test_regions_property_is_a_copy(self, provider):
        """Test callers cannot register regions through the mapping."""
        provider.regions["users"] = None

        assert provider.regions == {}

    def test_start_merges_properties(self, provider):
        """Test provider-wide properties apply to later regions."""
        provider.start({"expiration": "45"})

        region = provider.build_cache("users")

        assert region.expiration == timedelta(seconds=45)

    def test_property_layering(self, store, timestamper, settings):
        """Test call properties beat the document, which beats provider properties."""
        document = RegionPropertiesDocument(
            defaults={"cache.use_sliding_expiration": "true"},
            regions={"users": {"expiration": "20", "regionPrefix": "doc."}},
        )
        provider = RegionCacheProvider(
            {"expiration": "10", "regionPrefix": "provider."},
            store=store,
            timestamper=timestamper,
            settings=settings,
            document=document,
        )

        users = provider.build_cache("users", {"regionPrefix": "call."})
        orders = provider.build_cache("orders")

        assert users.expiration == timedelta(seconds=20)
        assert users.region_prefix == "call."
        assert users.use_sliding_expiration is True
        assert orders.expiration == timedelta(seconds=10)
        assert orders.region_prefix == "provider."

    def test_malformed_properties(self, provider):
        """Test a malformed option fails region construction."""
        with pytest.raises(CacheConfigurationError):
            provider.build_cache("users", {"expiration": "notanumber"})

        assert provider.regions == {}

    def test_from_file(self, tmp_path, store, timestamper, settings):
        """Test per-region properties preloaded from a file."""
        path = tmp_path / "regions.yaml"
        path.write_text(
            "regions:\n"
            "  users:\n"
            "    expiration: 15\n"
        )

        provider = RegionCacheProvider.from_file(
            path, store=store, timestamper=timestamper, settings=settings
        )

        assert provider.build_cache("users").expiration == timedelta(seconds=15)
        assert provider.build_cache("orders").expiration == timedelta(seconds=300)

    def test_stop_destroys_regions(self, provider):
        """Test stop clears every region and forgets them."""
        users = provider.build_cache("users")
        users.put("a", 1)

        provider.stop()

        assert users.get("a") is None
        assert provider.regions == {}
        assert provider.build_cache("users") is not users

    def test_next_timestamp(self, provider):
        """Test stamps come from the shared timestamper."""
        region = provider.build_cache("users")

        first = provider.next_timestamp()
        second = region.next_timestamp()

        assert second == first + 1

    def test_factory(self, store):
        """Test factory function."""
        provider = create_region_cache_provider({"expiration": "5"}, store=store)

        assert provider.store is store
