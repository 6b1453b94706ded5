"""Region cache service.

ONLY region caching - named, expiring cache region in front of a shared
keyed store, with whole-region invalidation in constant time.
"""

import logging
import threading
from datetime import timedelta
from typing import Any, Mapping, Optional

from ...config.settings import RegionCacheSettings, get_settings
from ...core.entities.stored_record import StoredRecord
from ...core.exceptions.cache_configuration_error import CacheConfigurationError
from ...core.exceptions.invalid_cache_argument import InvalidCacheArgument
from ...core.protocols.keyed_store import KeyedStore
from ...core.protocols.timestamp_source import TimestampSource
from ...core.value_objects.expiration_policy import ExpirationPolicy
from ...core.value_objects.generation_token import GenerationToken
from ...core.value_objects.removal_notice import RemovalNotice
from ...core.value_objects.storage_key import StorageKeyBuilder
from ...core.value_objects.store_item_policy import StoreItemPolicy
from ...infrastructure.configuration.region_config import RegionConfig
from ...infrastructure.stores.memory_store import MemoryStore
from ...infrastructure.timestamps.timestamper import get_timestamper

logger = logging.getLogger(__name__)

# Lock wait timeout, one minute expressed in timestamp units
LOCK_TIMEOUT_MS = 60000


class RegionCache:
    """Region cache.

    Every entry is written as a ``StoredRecord`` under a storage key that
    embeds the region identity, and is registered in the store as
    dependent on the region's current generation token. ``clear()``
    removes that token and stores a new one: every entry bound to the old
    token becomes unreachable at once, without being visited.

    Concurrency:
    - The store is shared and thread-safe. Entry reads and writes take no
      lock here; only token swaps (``clear`` and renewal) are serialized.
    - ``lock``/``unlock`` are no-ops. No mutual exclusion is provided,
      within the process or across processes.
    - A ``put`` racing a ``clear`` may bind to the token being replaced
      and survive that ``clear``, or may not.
    """

    def __init__(
        self,
        region_name: str,
        properties: Optional[Mapping[str, Any]] = None,
        *,
        store: Optional[KeyedStore] = None,
        timestamper: Optional[TimestampSource] = None,
        settings: Optional[RegionCacheSettings] = None
    ):
        """Initialize region cache.

        Args:
            region_name: Region identity, must not be empty
            properties: Region options (expiration, cache.default_expiration,
                cache.use_sliding_expiration, regionPrefix)
            store: Backing keyed store, the process-wide MemoryStore by default
            timestamper: Version stamp source, the process-wide Timestamper by default
            settings: Defaults for options the properties leave unset

        Raises:
            CacheConfigurationError: Empty region name or malformed option
        """
        if not isinstance(region_name, str) or not region_name:
            raise CacheConfigurationError.empty_region_name()

        settings = settings or get_settings()

        self._region_name = region_name
        self._config = RegionConfig.from_properties(properties, settings)
        self._keys = StorageKeyBuilder(
            key_prefix=settings.key_prefix,
            region_prefix=self._config.region_prefix,
            region_name=region_name,
        )
        self._entry_expiration = self._config.expiration_policy()
        self._store = store if store is not None else MemoryStore.default()
        self._timestamper = timestamper or get_timestamper()

        self._token_lock = threading.Lock()
        self._generation_token = GenerationToken.generate()
        self._generation_token_present = False
        self._store_generation_token()

    @property
    def region_name(self) -> str:
        """The cache region name."""
        return self._region_name

    @property
    def region_prefix(self) -> str:
        return self._config.region_prefix

    @property
    def expiration(self) -> timedelta:
        """The cached items expiration, as a timedelta."""
        return self._config.expiration

    @property
    def use_sliding_expiration(self) -> bool:
        """Whether an item's expiration is reset at each hit."""
        return self._config.use_sliding_expiration

    @property
    def generation_token_present(self) -> bool:
        """Whether the current generation token is believed to be in the store."""
        return self._generation_token_present

    @property
    def timeout(self) -> int:
        """Lock wait timeout in timestamp units. Informational, locks are no-ops."""
        return self._timestamper.ONE_MS * LOCK_TIMEOUT_MS

    def get(self, key: Any) -> Optional[Any]:
        """Get a cached value.

        Returns None for a None key, a missing, expired or invalidated
        entry, and for an entry whose storage key collided with another
        key's or another region's. A collided record is left in place.
        """
        if key is None:
            return None

        storage_key = self._keys.build(key)
        logger.debug("Fetching object '%s' from the cache.", storage_key)

        record = self._store.get(storage_key)
        if record is None:
            return None

        if (
            not isinstance(record, StoredRecord)
            or not record.belongs_to(self._keys.identity)
            or not record.matches(key)
        ):
            logger.debug("Storage key '%s' holds another key's record, treating as a miss", storage_key)
            return None

        return record.value

    def put(self, key: Any, value: Any) -> None:
        """Cache a value under the current generation.

        Raises:
            InvalidCacheArgument: key or value is None
        """
        if key is None:
            raise InvalidCacheArgument.null_key("put")
        if value is None:
            raise InvalidCacheArgument.null_value("put")

        storage_key = self._keys.build(key)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "updating value of key '%s'." if self._store.contains(storage_key)
                else "adding new data: key=%s", storage_key
            )

        # Binding to a token the store no longer holds would make the entry
        # invisible at once, so put it back first
        if not self._generation_token_present:
            self._renew_generation_token()

        self._store.set(
            storage_key,
            StoredRecord(original_key=key, value=value, region=self._keys.identity),
            StoreItemPolicy(
                expiration=self._entry_expiration,
                depends_on=(self._keys.build(self._generation_token),),
            ),
        )

    def remove(self, key: Any) -> None:
        """Remove a cached value.

        Raises:
            InvalidCacheArgument: key is None
        """
        if key is None:
            raise InvalidCacheArgument.null_key("remove")

        storage_key = self._keys.build(key)
        logger.debug("removing item with key: %s", storage_key)
        self._store.remove(storage_key)

    def clear(self) -> None:
        """Invalidate every entry of the region.

        Removes the generation token every entry depends on and stores a
        fresh one. Entries are not visited.
        """
        with self._token_lock:
            self._store.remove(self._keys.build(self._generation_token))
            self._generation_token = GenerationToken.generate()
            self._store_generation_token()
        logger.debug("Cleared region '%s'", self._region_name)

    def destroy(self) -> None:
        """Release the region. Holds no other resources than its entries."""
        self.clear()

    def lock(self, key: Any) -> None:
        """No-op, this cache provides no mutual exclusion."""

    def unlock(self, key: Any) -> None:
        """No-op, this cache provides no mutual exclusion."""

    def next_timestamp(self) -> int:
        """Next optimistic-concurrency version stamp."""
        return self._timestamper.next()

    def _renew_generation_token(self) -> None:
        with self._token_lock:
            # A concurrent clear may already have stored a new token
            if self._generation_token_present:
                return
            self._generation_token = GenerationToken.generate()
            self._store_generation_token()

    def _store_generation_token(self) -> None:
        token = self._generation_token
        self._generation_token_present = True
        self._store.add(
            self._keys.build(token),
            token,
            StoreItemPolicy(
                expiration=ExpirationPolicy.never(),
                removed_callback=self._generation_token_removed,
            ),
        )

    def _generation_token_removed(self, notice: RemovalNotice) -> None:
        # Removal of a superseded token says nothing about the current one
        if notice.value == self._generation_token:
            logger.debug(
                "Generation token of region '%s' left the store (%s)",
                self._region_name, notice.reason.value
            )
            self._generation_token_present = False

    def __repr__(self) -> str:
        return (
            f"RegionCache(region_name={self._region_name!r}, "
            f"expiration={self._entry_expiration})"
        )


# Factory function for dependency injection
def create_region_cache(
    region_name: str,
    properties: Optional[Mapping[str, Any]] = None,
    store: Optional[KeyedStore] = None,
    timestamper: Optional[TimestampSource] = None
) -> RegionCache:
    """Create region cache.

    Args:
        region_name: Region identity
        properties: Region options
        store: Backing keyed store
        timestamper: Version stamp source

    Returns:
        Configured region cache
    """
    return RegionCache(region_name, properties, store=store, timestamper=timestamper)
