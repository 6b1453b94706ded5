"""Region cache services."""

from .region_cache import RegionCache, create_region_cache
from .cache_provider import RegionCacheProvider, create_region_cache_provider

__all__ = [
    "RegionCache",
    "create_region_cache",
    "RegionCacheProvider",
    "create_region_cache_provider",
]
