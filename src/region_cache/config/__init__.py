"""Region cache configuration."""

from .logging_config import LoggingConfig, LogFormat, LogLevel, LogVerbosity, setup_logging
from .settings import MAX_EXPIRATION_SECONDS, RegionCacheSettings, get_settings

__all__ = [
    "LoggingConfig",
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "setup_logging",
    "MAX_EXPIRATION_SECONDS",
    "RegionCacheSettings",
    "get_settings",
]
