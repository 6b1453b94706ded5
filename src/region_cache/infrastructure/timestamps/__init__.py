"""Timestamp sources."""

from .timestamper import Timestamper, get_timestamper

__all__ = [
    "Timestamper",
    "get_timestamper",
]
