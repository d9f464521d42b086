"""Unit tests for InMemoryStore class."""

from kvstore.in_memory_store import InMemoryStore


def test_connect_and_ready() -> None:
    """Test that in-memory store is always connected and ready."""
    store = InMemoryStore()
    store.connect()
    assert store.connected() is True
    assert store.ready() is True


def test_get_missing_key() -> None:
    """Test that None is returned for key that was never stored."""
    store = InMemoryStore()
    assert store.get("user:u-1") is None


def test_put_and_overwrite() -> None:
    """Test that put stores value and overwrites existing one."""
    store = InMemoryStore()
    store.put("user:u-1", "first")
    assert store.get("user:u-1") == "first"

    store.put("user:u-1", "second")
    assert store.get("user:u-1") == "second"


def test_delete() -> None:
    """Test that delete reports whether the key existed."""
    store = InMemoryStore()
    store.put("quota:u-1", "{}")

    assert store.delete("quota:u-1") is True
    assert store.get("quota:u-1") is None
    assert store.delete("quota:u-1") is False


def test_list_keys_by_prefix() -> None:
    """Test listing keys that start with given prefix."""
    store = InMemoryStore()
    store.put("user:u-1", "{}")
    store.put("user:u-2", "{}")
    store.put("quota:u-1", "{}")

    assert sorted(store.list_keys("user:")) == ["user:u-1", "user:u-2"]
    assert store.list_keys("limit:") == []
    assert len(store.list_keys()) == 3


def test_stores_are_independent() -> None:
    """Test that two instances do not share data."""
    store1 = InMemoryStore()
    store2 = InMemoryStore()
    store1.put("user:u-1", "{}")
    assert store2.get("user:u-1") is None
