"""Cache application layer."""

from .services import *

__all__ = [
    "RegionCache",
    "create_region_cache",
    "RegionCacheProvider",
    "create_region_cache_provider",
]
