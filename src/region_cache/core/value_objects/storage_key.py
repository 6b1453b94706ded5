"""Storage key value object.

ONLY key composition - derives the namespaced storage key for a logical
key. Pure and deterministic, performs no I/O.
"""

import hashlib
from collections.abc import Mapping, Set
from dataclasses import dataclass
from typing import Any, Tuple

# Separates the region name from the logical key
REGION_SEPARATOR = ":"

# Separates the display string from the hash suffix
HASH_SEPARATOR = "@"


def _is_hashable(key: Any) -> bool:
    # A tuple holding a list is hashable by type but not by content
    try:
        hash(key)
    except TypeError:
        return False
    return True


def _canonical_text(value: Any) -> str:
    """Render a container independently of insertion or iteration order.

    Mapping items and set members are sorted by their own rendering, so
    equal mappings and sets always render the same. Sequences keep their
    order.
    """
    if isinstance(value, Mapping):
        items = sorted(f"{_canonical_text(k)}: {_canonical_text(v)}" for k, v in value.items())
        return "{" + ", ".join(items) + "}"
    if isinstance(value, Set):
        members = sorted(_canonical_text(member) for member in value)
        return "{" + ", ".join(members) + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_canonical_text(item) for item in value) + "]"
    if isinstance(value, tuple):
        rendered = [_canonical_text(item) for item in value]
        return "(" + ", ".join(rendered) + ("," if len(rendered) == 1 else "") + ")"
    return repr(value)


def display_string(key: Any) -> str:
    """Human-readable form of a logical key.

    Objects relying on the default ``object`` string conversion render as
    their type name, so the storage key does not embed a memory address.
    Unhashable keys, mappings and sets render canonically, so equal keys
    display the same whatever order they were built in.
    """
    key_type = type(key)
    if key_type.__str__ is object.__str__ and key_type.__repr__ is object.__repr__:
        return key_type.__qualname__
    if isinstance(key, (Mapping, Set)) or not _is_hashable(key):
        return _canonical_text(key)
    return str(key)


def key_hash(key: Any) -> str:
    """Hash suffix disambiguating keys whose display strings collide.

    Hashable keys use their own ``__hash__`` so that equal keys always map
    to the same storage key. Unhashable keys (lists, dicts, sets) fall back
    to a BLAKE2b digest of their type name and canonical rendering, so
    ``{"a": 1, "b": 2}`` and ``{"b": 2, "a": 1}`` share a storage key.
    """
    if _is_hashable(key):
        return str(hash(key))

    key_type = type(key)
    material = f"{key_type.__module__}.{key_type.__qualname__}:{_canonical_text(key)}"
    return hashlib.blake2b(material.encode("utf-8"), digest_size=8).hexdigest()


@dataclass(frozen=True)
class StorageKeyBuilder:
    """Storage key builder for one region.

    Layout::

        key_prefix + region_prefix + region_name + ":" + str(key) + "@" + hash(key)

    Every storage key embeds the region prefix and name. They are
    concatenated, so regions such as ``"x" + "ab"`` and ``"xa" + "b"``
    share a namespace; ``identity`` keeps the parts apart for readers to
    compare. The hash suffix only narrows collisions; readers must still
    compare the original key.
    """

    key_prefix: str
    region_prefix: str
    region_name: str

    @property
    def identity(self) -> Tuple[str, str, str]:
        """The region's parts, kept apart, to tell regions with equal namespaces apart."""
        return (self.key_prefix, self.region_prefix, self.region_name)

    @property
    def namespace(self) -> str:
        """Prefix shared by every storage key of the region."""
        return f"{self.key_prefix}{self.region_prefix}{self.region_name}{REGION_SEPARATOR}"

    def build(self, key: Any) -> str:
        """Build the storage key for a logical key."""
        return f"{self.namespace}{display_string(key)}{HASH_SEPARATOR}{key_hash(key)}"

    def owns(self, storage_key: str) -> bool:
        """Check if a storage key belongs to this region."""
        return storage_key.startswith(self.namespace)

    def __str__(self) -> str:
        return self.namespace
