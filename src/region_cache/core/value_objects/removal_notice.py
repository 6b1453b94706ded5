"""Removal notice value object.

ONLY removal reporting - describes why a store dropped an item, passed
to the item's removal callback.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class RemovalReason(Enum):
    """Why an item left the store."""

    REMOVED = "removed"                          # Explicit remove
    REPLACED = "replaced"                        # Overwritten by a set
    EXPIRED = "expired"                          # Deadline reached
    EVICTED = "evicted"                          # Dropped by the store itself
    DEPENDENCY_CHANGED = "dependency_changed"    # A dependency was removed or replaced


@dataclass(frozen=True)
class RemovalNotice:
    """Removal notice delivered to removal callbacks."""

    key: str
    value: Any
    reason: RemovalReason
