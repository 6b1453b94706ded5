"""Cache domain exceptions.

One exception per file.
"""

from .cache_configuration_error import CacheConfigurationError
from .invalid_cache_argument import InvalidCacheArgument

__all__ = [
    "CacheConfigurationError",
    "InvalidCacheArgument",
]
