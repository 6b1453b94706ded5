"""Region configuration system.

One configuration concern per file.
"""

from .region_config import (
    RegionConfig,
    create_region_config,
    EXPIRATION_OPTION,
    DEFAULT_EXPIRATION_OPTION,
    SLIDING_EXPIRATION_OPTION,
    REGION_PREFIX_OPTION,
    RECOGNIZED_OPTIONS,
)
from .region_properties import RegionPropertiesDocument, load_region_properties

__all__ = [
    "RegionConfig",
    "create_region_config",
    "EXPIRATION_OPTION",
    "DEFAULT_EXPIRATION_OPTION",
    "SLIDING_EXPIRATION_OPTION",
    "REGION_PREFIX_OPTION",
    "RECOGNIZED_OPTIONS",
    "RegionPropertiesDocument",
    "load_region_properties",
]
