"""Keyed store implementations."""

from .memory_store import MemoryStore, StoredItem, create_memory_store

__all__ = [
    "MemoryStore",
    "StoredItem",
    "create_memory_store",
]
