"""Region configuration.

ONLY region option parsing - turns the string-keyed properties of a
region into validated settings. Malformed options fail construction
rather than being silently defaulted.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from ...config.settings import MAX_EXPIRATION_SECONDS, RegionCacheSettings, get_settings
from ...core.exceptions.cache_configuration_error import CacheConfigurationError
from ...core.value_objects.expiration_policy import ExpirationPolicy

logger = logging.getLogger(__name__)

EXPIRATION_OPTION = "expiration"
DEFAULT_EXPIRATION_OPTION = "cache.default_expiration"
SLIDING_EXPIRATION_OPTION = "cache.use_sliding_expiration"
REGION_PREFIX_OPTION = "regionPrefix"

RECOGNIZED_OPTIONS = (
    EXPIRATION_OPTION,
    DEFAULT_EXPIRATION_OPTION,
    SLIDING_EXPIRATION_OPTION,
    REGION_PREFIX_OPTION,
)


@dataclass(frozen=True)
class RegionConfig:
    """Parsed region configuration.

    Recognized options, all optional:
    - expiration (or cache.default_expiration): seconds before an entry expires
    - cache.use_sliding_expiration: reset an entry's expiration on each hit
    - regionPrefix: string prefixed to the region name in storage keys
    """

    expiration: timedelta
    use_sliding_expiration: bool
    region_prefix: str

    @classmethod
    def defaults(cls, settings: Optional[RegionCacheSettings] = None) -> "RegionConfig":
        """Create configuration from settings defaults alone."""
        settings = settings or get_settings()
        return cls(
            expiration=timedelta(seconds=settings.default_expiration),
            use_sliding_expiration=settings.use_sliding_expiration,
            region_prefix=settings.region_prefix,
        )

    @classmethod
    def from_properties(
        cls,
        properties: Optional[Mapping[str, Any]],
        settings: Optional[RegionCacheSettings] = None
    ) -> "RegionConfig":
        """Create configuration from region properties.

        Args:
            properties: String-keyed region options, None for defaults
            settings: Defaults for options the properties leave unset

        Raises:
            CacheConfigurationError: An option could not be parsed
        """
        settings = settings or get_settings()

        if properties is None:
            logger.warning("configuring cache with default values")
            return cls.defaults(settings)

        unknown = sorted(str(name) for name in properties if name not in RECOGNIZED_OPTIONS)
        if unknown:
            logger.debug("ignoring unrecognized region options: %s", ", ".join(unknown))

        return cls(
            expiration=_parse_expiration(properties, settings),
            use_sliding_expiration=_parse_sliding_expiration(properties, settings),
            region_prefix=_parse_region_prefix(properties, settings),
        )

    def expiration_policy(self) -> ExpirationPolicy:
        """Policy applied to every entry of the region."""
        return ExpirationPolicy.for_region(self.expiration, self.use_sliding_expiration)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "expiration_seconds": int(self.expiration.total_seconds()),
            "use_sliding_expiration": self.use_sliding_expiration,
            "region_prefix": self.region_prefix,
        }


def _parse_expiration(properties: Mapping[str, Any], settings: RegionCacheSettings) -> timedelta:
    option = EXPIRATION_OPTION
    raw = properties.get(EXPIRATION_OPTION)
    if raw is None:
        option = DEFAULT_EXPIRATION_OPTION
        raw = properties.get(DEFAULT_EXPIRATION_OPTION)

    if raw is None:
        logger.debug("no expiration value given, using defaults")
        return timedelta(seconds=settings.default_expiration)

    try:
        if isinstance(raw, bool):
            raise TypeError("boolean is not a number of seconds")
        seconds = raw if isinstance(raw, int) else int(str(raw).strip())
    except (TypeError, ValueError) as e:
        logger.error("error parsing expiration value '%s'", raw)
        raise CacheConfigurationError.invalid_expiration(option, raw) from e

    if seconds < 0:
        logger.error("negative expiration value '%s'", raw)
        raise CacheConfigurationError.negative_expiration(option, seconds)

    if seconds > MAX_EXPIRATION_SECONDS:
        logger.error("expiration value '%s' out of range", raw)
        raise CacheConfigurationError.expiration_too_large(option, seconds, MAX_EXPIRATION_SECONDS)

    logger.debug("new expiration value: %s", seconds)
    return timedelta(seconds=seconds)


def _parse_sliding_expiration(properties: Mapping[str, Any], settings: RegionCacheSettings) -> bool:
    raw = properties.get(SLIDING_EXPIRATION_OPTION)

    if raw is None or raw == "":
        sliding = settings.use_sliding_expiration
    elif isinstance(raw, bool):
        sliding = raw
    else:
        normalized = str(raw).strip().lower()
        if normalized not in ("true", "false"):
            logger.error("error parsing sliding expiration value '%s'", raw)
            raise CacheConfigurationError.invalid_boolean(SLIDING_EXPIRATION_OPTION, raw)
        sliding = normalized == "true"

    logger.debug("Use sliding expiration value: %s", sliding)
    return sliding


def _parse_region_prefix(properties: Mapping[str, Any], settings: RegionCacheSettings) -> str:
    raw = properties.get(REGION_PREFIX_OPTION)
    if raw is None:
        logger.debug("no regionPrefix value given, using defaults")
        return settings.region_prefix

    logger.debug("new regionPrefix: %s", raw)
    return str(raw)


# Factory function for dependency injection
def create_region_config(
    properties: Optional[Mapping[str, Any]] = None,
    settings: Optional[RegionCacheSettings] = None
) -> RegionConfig:
    """Create region configuration from properties."""
    return RegionConfig.from_properties(properties, settings)
