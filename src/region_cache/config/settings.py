"""
Region cache settings.

Environment-driven defaults applied when a region's own properties leave
an option unset.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Largest expiration accepted, in seconds (a signed 32-bit count, about 68 years)
MAX_EXPIRATION_SECONDS = 2 ** 31 - 1


class RegionCacheSettings(BaseSettings):
    """Region cache defaults, read from ``REGION_CACHE_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="REGION_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Expiration applied when neither 'expiration' nor 'cache.default_expiration' is given
    default_expiration: int = Field(default=300, ge=0, le=MAX_EXPIRATION_SECONDS)
    use_sliding_expiration: bool = Field(default=False)
    region_prefix: str = Field(default="")

    # Prepended to every storage key, ahead of the region prefix
    key_prefix: str = Field(default="RegionCache:")


@lru_cache()
def get_settings() -> RegionCacheSettings:
    """Get cached settings instance."""
    return RegionCacheSettings()
