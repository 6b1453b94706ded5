"""Cache value objects.

Immutable values - one value object per file.
"""

from .storage_key import StorageKeyBuilder, display_string, key_hash
from .expiration_policy import ExpirationMode, ExpirationPolicy
from .generation_token import GenerationToken
from .removal_notice import RemovalNotice, RemovalReason
from .store_item_policy import RemovedCallback, StoreItemPolicy

__all__ = [
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
