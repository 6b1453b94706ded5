"""Tests for storage key composition."""

import pytest

from region_cache.core.value_objects.storage_key import (
    StorageKeyBuilder,
    display_string,
    key_hash,
)


class PlainKey:
    """Relies on object's default string conversion."""


class EqualByIdKey:
    """Equal by field, default repr."""

    def __init__(self, ident):
        self.ident = ident

    def __eq__(self, other):
        return isinstance(other, EqualByIdKey) and self.ident == other.ident

    def __hash__(self):
        return hash(self.ident)


class TestStorageKeyBuilder:
    """Test cases for StorageKeyBuilder."""

    def test_layout(self):
        """Test storage key layout."""
        builder = StorageKeyBuilder("RegionCache:", "app.", "users")

        assert builder.build("a") == f"RegionCache:app.users:a@{hash('a')}"

    def test_namespace(self):
        """Test namespace shared by all keys of a region."""
        builder = StorageKeyBuilder("RegionCache:", "", "users")

        assert builder.namespace == "RegionCache:users:"
        assert str(builder) == "RegionCache:users:"
        assert builder.owns(builder.build(42))
        assert not builder.owns("RegionCache:orders:42@42")

    def test_deterministic(self):
        """Test the same key always yields the same storage key."""
        builder = StorageKeyBuilder("RegionCache:", "", "users")

        assert builder.build(("tenant", 7)) == builder.build(("tenant", 7))

    def test_regions_never_share_keys(self):
        """Test region name and prefix are both part of the key."""
        users = StorageKeyBuilder("RegionCache:", "", "users")
        orders = StorageKeyBuilder("RegionCache:", "", "orders")
        prefixed_users = StorageKeyBuilder("RegionCache:", "shop.", "users")

        keys = {users.build("a"), orders.build("a"), prefixed_users.build("a")}
        assert len(keys) == 3

    def test_hash_suffix_separates_equal_display_strings(self):
        """Test keys with the same display string get distinct storage keys."""
        builder = StorageKeyBuilder("RegionCache:", "", "users")

        assert display_string(1) == display_string("1")
        assert builder.build(1) != builder.build("1")

    def test_unhashable_keys(self):
        """Test lists and dicts can be used as keys."""
        builder = StorageKeyBuilder("RegionCache:", "", "users")

        assert builder.build([1, 2]) == builder.build([1, 2])
        assert builder.build([1, 2]) != builder.build([2, 1])
        assert builder.build({"id": 1}) == builder.build({"id": 1})

    def test_tuple_holding_list(self):
        """Test a hashable type with unhashable content falls back to a digest."""
        suffix = key_hash(("a", [1]))

        assert suffix == key_hash(("a", [1]))
        assert len(suffix) == 16

    def test_dict_keys_ignore_insertion_order(self):
        """Test equal dicts map to one storage key whatever their order."""
        builder = StorageKeyBuilder("RegionCache:", "", "users")

        assert builder.build({"a": 1, "b": 2}) == builder.build({"b": 2, "a": 1})
        assert builder.build({"a": 1, "b": 2}) != builder.build({"a": 1, "b": 3})

    def test_nested_containers_are_canonical(self):
        """Test canonical rendering reaches nested mappings and sets."""
        first = [{"x": {3, 1, 2}, "y": 1}]
        second = [{"y": 1, "x": {2, 3, 1}}]

        assert display_string(first) == display_string(second)
        assert key_hash(first) == key_hash(second)
        assert display_string(first) == "[{'x': {1, 2, 3}, 'y': 1}]"

    def test_identity_separates_concatenated_namespaces(self):
        """Test regions whose prefix and name concatenate alike stay distinguishable."""
        first = StorageKeyBuilder("RegionCache:", "x", "ab")
        second = StorageKeyBuilder("RegionCache:", "xa", "b")

        assert first.namespace == second.namespace
        assert first.identity != second.identity


class TestDisplayString:
    """Test cases for display_string."""

    def test_default_object_renders_type_name(self):
        """Test memory addresses never leak into storage keys."""
        assert display_string(PlainKey()) == "PlainKey"

    def test_equal_keys_with_default_repr_share_storage_key(self):
        """Test equality-based keys map to one storage key."""
        builder = StorageKeyBuilder("RegionCache:", "", "users")

        assert builder.build(EqualByIdKey(5)) == builder.build(EqualByIdKey(5))

    @pytest.mark.parametrize("key, expected", [
        ("abc", "abc"),
        (12, "12"),
        ((1, "x"), "(1, 'x')"),
    ])
    def test_uses_str(self, key, expected):
        """Test keys with their own string form use it."""
        assert display_string(key) == expected
