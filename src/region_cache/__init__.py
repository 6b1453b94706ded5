"""Region Cache - region-scoped, expiring cache adapter.

Each region namespaces its storage keys, expires entries on an absolute
or sliding window, and invalidates all of its entries in constant time by
replacing the generation token they depend on.
"""

from .__version__ import __version__

from .application import (
    RegionCache,
    create_region_cache,
    RegionCacheProvider,
    create_region_cache_provider,
)
from .config import RegionCacheSettings, get_settings, setup_logging
from .core import (
    Cache,
    CacheConfigurationError,
    ExpirationPolicy,
    InvalidCacheArgument,
    KeyedStore,
    StorageKeyBuilder,
    StoredRecord,
    StoreItemPolicy,
)
from .infrastructure import (
    MemoryStore,
    RegionConfig,
    Timestamper,
    load_region_properties,
)

__all__ = [
    "__version__",
    "RegionCache",
    "create_region_cache",
    "RegionCacheProvider",
    "create_region_cache_provider",
    "RegionCacheSettings",
    "get_settings",
    "setup_logging",
    "Cache",
    "CacheConfigurationError",
    "ExpirationPolicy",
    "InvalidCacheArgument",
    "KeyedStore",
    "StorageKeyBuilder",
    "StoredRecord",
    "StoreItemPolicy",
    "MemoryStore",
    "RegionConfig",
    "Timestamper",
    "load_region_properties",
]
