"""Cache domain entities."""

from .stored_record import RegionIdentity, StoredRecord

__all__ = [
    "RegionIdentity",
    "StoredRecord",
]
