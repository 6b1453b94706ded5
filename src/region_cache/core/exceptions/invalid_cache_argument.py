"""Invalid cache argument error.

ONLY argument errors - exception raised when a cache operation is
called with a null key or value.
"""

from typing import Optional


class InvalidCacheArgument(ValueError):
    """Cache argument error.

    Nulls are never cached. Raised when:
    - put or remove receives a None key
    - put receives a None value
    The operation does not proceed and no state changes.
    """

    def __init__(
        self,
        argument: str,
        operation: str,
        reason: str,
        error_code: Optional[str] = None
    ):
        """Initialize argument error.

        Args:
            argument: Name of the rejected argument
            operation: Cache operation that rejected it
            reason: Human-readable reason
            error_code: Optional machine-readable error code
        """
        self.argument = argument
        self.operation = operation
        self.reason = reason
        self.error_code = error_code or "CACHE_ARGUMENT_INVALID"

        super().__init__(f"Invalid argument '{argument}' for {operation}: {reason}")

    @classmethod
    def null_key(cls, operation: str) -> "InvalidCacheArgument":
        """Create exception for a None key."""
        return cls(
            argument="key",
            operation=operation,
            reason="null key not allowed",
            error_code="CACHE_KEY_NULL"
        )

    @classmethod
    def null_value(cls, operation: str) -> "InvalidCacheArgument":
        """Create exception for a None value."""
        return cls(
            argument="value",
            operation=operation,
            reason="null value not allowed",
            error_code="CACHE_VALUE_NULL"
        )

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": "InvalidCacheArgument",
            "error_code": self.error_code,
            "argument": self.argument,
            "operation": self.operation,
            "reason": self.reason,
        }
