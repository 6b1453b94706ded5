"""Stored record domain entity.

ONLY stored record - what a logical cache entry becomes in the keyed
store: the calling key and the owning region kept verbatim next to the
value.
"""

from dataclasses import dataclass
from typing import Any, Tuple

RegionIdentity = Tuple[str, str, str]


@dataclass(frozen=True)
class StoredRecord:
    """Stored record domain entity.

    The original key is stored, not just its derived storage key, so a
    read can detect a storage-key collision and report a miss instead of
    returning another key's value. The owning region's identity (key
    prefix, region prefix, region name) is kept for the same reason:
    prefixes and names are concatenated, so two regions such as
    ``"x" + "ab"`` and ``"xa" + "b"`` share a namespace. Records are never
    mutated: a put to the same key writes a new record.
    """

    original_key: Any
    value: Any
    region: RegionIdentity = ("", "", "")

    def matches(self, key: Any) -> bool:
        """Check if the record was written for ``key``."""
        return bool(self.original_key == key)

    def belongs_to(self, region: RegionIdentity) -> bool:
        """Check if the record was written by ``region``."""
        return self.region == region
