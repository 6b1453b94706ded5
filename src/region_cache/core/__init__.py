"""Cache core layer.

Domain entities, value objects, protocols and exceptions.
"""

from .entities import *
from .exceptions import *
from .protocols import *
from .value_objects import *

__all__ = [
    # Entities
    "StoredRecord",

    # Exceptions
    "CacheConfigurationError",
    "InvalidCacheArgument",

    # Protocols
    "Cache",
    "KeyedStore",
    "TimestampSource",

    # Value objects
    "StorageKeyBuilder",
    "display_string",
    "key_hash",
    "ExpirationMode",
    "ExpirationPolicy",
    "GenerationToken",
    "RemovalNotice",
    "RemovalReason",
    "RemovedCallback",
    "StoreItemPolicy",
]
