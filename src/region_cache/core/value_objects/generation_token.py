"""Generation token value object.

ONLY invalidation epochs - opaque marker every entry of a region is
bound to. Replacing the token orphans every entry bound to the old one.
"""

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationToken:
    """Generation token value object.

    Globally unique; a new one is generated for every invalidation epoch
    and never reused.
    """

    value: str

    def __post_init__(self):
        """Validate token."""
        if not self.value:
            raise ValueError("Generation token cannot be empty")

    @classmethod
    def generate(cls) -> "GenerationToken":
        """Create a fresh token."""
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return f"generation:{self.value}"
