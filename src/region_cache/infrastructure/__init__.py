"""Cache infrastructure layer.

Keyed store, timestamp source and configuration implementations.
"""

from .configuration import *
from .stores import *
from .timestamps import *

__all__ = [
    # Configuration
    "RegionConfig",
    "create_region_config",
    "RegionPropertiesDocument",
    "load_region_properties",

    # Stores
    "MemoryStore",
    "StoredItem",
    "create_memory_store",

    # Timestamps
    "Timestamper",
    "get_timestamper",
]
