"""Region cache provider.

ONLY region lifecycle - builds named regions that share one keyed store
and one timestamp source, and tears them down together.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ...config.settings import RegionCacheSettings
from ...core.protocols.keyed_store import KeyedStore
from ...core.protocols.timestamp_source import TimestampSource
from ...infrastructure.configuration.region_properties import (
    RegionPropertiesDocument,
    load_region_properties,
)
from ...infrastructure.stores.memory_store import MemoryStore
from ...infrastructure.timestamps.timestamper import get_timestamper
from .region_cache import RegionCache

logger = logging.getLogger(__name__)


class RegionCacheProvider:
    """Region cache provider.

    Properties for a region are layered, later layers winning:
    1. Provider-wide properties given to the constructor or ``start()``
    2. The region's section of a properties document, if any
    3. Properties passed to ``build_cache()``

    Regions are memoised by name: building an existing region returns it
    unchanged.
    """

    def __init__(
        self,
        properties: Optional[Mapping[str, Any]] = None,
        *,
        store: Optional[KeyedStore] = None,
        timestamper: Optional[TimestampSource] = None,
        settings: Optional[RegionCacheSettings] = None,
        document: Optional[RegionPropertiesDocument] = None
    ):
        """Initialize provider.

        Args:
            properties: Provider-wide region properties
            store: Keyed store shared by every region
            timestamper: Version stamp source shared by every region
            settings: Defaults for options no property sets
            document: Per-region properties, usually loaded from a file
        """
        self._properties: Dict[str, Any] = dict(properties or {})
        self._store = store if store is not None else MemoryStore.default()
        self._timestamper = timestamper or get_timestamper()
        self._settings = settings
        self._document = document or RegionPropertiesDocument()
        self._regions: Dict[str, RegionCache] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, file_path: Union[str, Path], **kwargs: Any) -> "RegionCacheProvider":
        """Create provider with per-region properties from a YAML or JSON file."""
        return cls(document=load_region_properties(file_path), **kwargs)

    @property
    def store(self) -> KeyedStore:
        return self._store

    @property
    def regions(self) -> Dict[str, RegionCache]:
        """Regions built so far, by name."""
        with self._lock:
            return dict(self._regions)

    def start(self, properties: Optional[Mapping[str, Any]] = None) -> None:
        """Start the provider, merging provider-wide properties."""
        if properties:
            self._properties.update(properties)
        logger.debug("Region cache provider started with %d properties", len(self._properties))

    def build_cache(
        self,
        region_name: str,
        properties: Optional[Mapping[str, Any]] = None
    ) -> RegionCache:
        """Get or create a region.

        Raises:
            CacheConfigurationError: Empty region name or malformed option
        """
        with self._lock:
            region = self._regions.get(region_name)
            if region is not None:
                return region

            merged = {
                **self._properties,
                **self._document.properties_for(region_name),
                **(properties or {}),
            }
            region = RegionCache(
                region_name,
                merged or None,
                store=self._store,
                timestamper=self._timestamper,
                settings=self._settings,
            )
            self._regions[region_name] = region
            logger.debug("Built region %r", region)
            return region

    def next_timestamp(self) -> int:
        """Next optimistic-concurrency version stamp."""
        return self._timestamper.next()

    def stop(self) -> None:
        """Destroy every region built by this provider."""
        with self._lock:
            regions = list(self._regions.values())
            self._regions.clear()

        for region in regions:
            region.destroy()
        logger.debug("Region cache provider stopped, %d regions destroyed", len(regions))


# Factory function for dependency injection
def create_region_cache_provider(
    properties: Optional[Mapping[str, Any]] = None,
    store: Optional[KeyedStore] = None
) -> RegionCacheProvider:
    """Create region cache provider.

    Args:
        properties: Provider-wide region properties
        store: Keyed store shared by every region

    Returns:
        Configured provider
    """
    return RegionCacheProvider(properties, store=store)
