"""Cache configuration error.

ONLY configuration errors - exception raised when a region cannot be
built from the supplied options.
"""

from typing import Any, Optional


class CacheConfigurationError(ValueError):
    """Region configuration error.

    Raised at construction time when:
    - The region name is missing or empty
    - The expiration option is not a non-negative integer, or is too large
    - A boolean option cannot be parsed
    - A region properties file is malformed
    """

    def __init__(
        self,
        option: str,
        reason: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        """Initialize configuration error.

        Args:
            option: Name of the offending option
            reason: Human-readable reason for the failure
            error_code: Optional machine-readable error code
            details: Optional additional error details
        """
        self.option = option
        self.reason = reason
        self.error_code = error_code or "CACHE_CONFIGURATION_INVALID"
        self.details = details or {}

        super().__init__(f"Invalid cache option '{option}': {reason}")

    @classmethod
    def empty_region_name(cls) -> "CacheConfigurationError":
        """Create exception for a missing region name."""
        return cls(
            option="region",
            reason="Region name cannot be empty",
            error_code="CACHE_REGION_NAME_EMPTY"
        )

    @classmethod
    def invalid_expiration(cls, option: str, value: Any) -> "CacheConfigurationError":
        """Create exception for an expiration that is not a number of seconds."""
        return cls(
            option=option,
            reason=f"could not parse expiration '{value}' as a number of seconds",
            error_code="CACHE_EXPIRATION_INVALID",
            details={"value": value}
        )

    @classmethod
    def negative_expiration(cls, option: str, seconds: int) -> "CacheConfigurationError":
        """Create exception for a negative expiration."""
        return cls(
            option=option,
            reason=f"expiration must be zero or more seconds, got {seconds}",
            error_code="CACHE_EXPIRATION_NEGATIVE",
            details={"value": seconds}
        )

    @classmethod
    def expiration_too_large(cls, option: str, seconds: int, maximum: int) -> "CacheConfigurationError":
        """Create exception for an expiration beyond the supported range."""
        return cls(
            option=option,
            reason=f"expiration must be at most {maximum} seconds, got {seconds}",
            error_code="CACHE_EXPIRATION_TOO_LARGE",
            details={"value": seconds, "maximum": maximum}
        )

    @classmethod
    def invalid_boolean(cls, option: str, value: Any) -> "CacheConfigurationError":
        """Create exception for an unparseable boolean option."""
        return cls(
            option=option,
            reason=f"could not parse '{value}' as a boolean",
            error_code="CACHE_BOOLEAN_INVALID",
            details={"value": value}
        )

    @classmethod
    def malformed_file(cls, path: str, issue: str) -> "CacheConfigurationError":
        """Create exception for an unreadable region properties file."""
        return cls(
            option=path,
            reason=f"malformed region properties file: {issue}",
            error_code="CACHE_PROPERTIES_FILE_INVALID",
            details={"path": path}
        )

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": "CacheConfigurationError",
            "error_code": self.error_code,
            "option": self.option,
            "reason": self.reason,
            "details": self.details
        }
