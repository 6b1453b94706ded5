"""Store item policy value object.

ONLY per-item storage policy - expiration, dependencies and removal
callback handed to the keyed store with every write.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from .expiration_policy import ExpirationPolicy
from .removal_notice import RemovalNotice

RemovedCallback = Callable[[RemovalNotice], None]


@dataclass(frozen=True)
class StoreItemPolicy:
    """Store item policy value object.

    ``depends_on`` lists storage keys the item is bound to: when any of
    them is removed or replaced the item becomes unreachable.
    """

    expiration: ExpirationPolicy = field(default_factory=ExpirationPolicy.never)
    depends_on: Tuple[str, ...] = ()
    removed_callback: Optional[RemovedCallback] = None
