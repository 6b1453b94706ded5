"""Cache protocols.

Contracts for the region cache and its collaborators.
"""

from .cache import Cache
from .keyed_store import KeyedStore
from .timestamp_source import TimestampSource

__all__ = [
    "Cache",
    "KeyedStore",
    "TimestampSource",
]
