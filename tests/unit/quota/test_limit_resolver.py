"""Unit tests for LimitResolver class."""

from kvstore.in_memory_store import InMemoryStore
from models.usage import LimitOverride, ResolvedLimits, SystemLimits
from quota.limit_resolver import LimitResolver, limit_key


def test_limit_key() -> None:
    """Test construction of limit override key."""
    assert limit_key("u-1") == "limit:u-1"


def test_system_limits_defaults(store: InMemoryStore) -> None:
    """Test that defaults are used until system limits are stored."""
    resolver = LimitResolver(store)
    assert resolver.system_limits() == SystemLimits(monthly_limit=50, daily_limit=10)

    resolver = LimitResolver(store, SystemLimits(monthly_limit=100, daily_limit=5))
    assert resolver.system_limits() == SystemLimits(monthly_limit=100, daily_limit=5)


def test_set_system_limits(store: InMemoryStore) -> None:
    """Test that system limits are persisted."""
    LimitResolver(store).set_system_limits(200, 20)

    # another resolver sharing the store sees the same limits
    assert LimitResolver(store).system_limits() == SystemLimits(
        monthly_limit=200, daily_limit=20
    )
    assert "config:system_limits" in store.list_keys("config:")


def test_resolve_without_override(store: InMemoryStore) -> None:
    """Test that system limits apply to user without override."""
    assert LimitResolver(store).resolve("u-1") == ResolvedLimits(
        monthly_limit=50, daily_limit=10
    )


def test_resolve_with_partial_override(store: InMemoryStore) -> None:
    """Test that override is applied field by field."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(daily_limit=5))

    assert resolver.resolve("u-1") == ResolvedLimits(monthly_limit=50, daily_limit=5)
    # other users are not affected
    assert resolver.resolve("u-2") == ResolvedLimits(monthly_limit=50, daily_limit=10)


def test_resolve_follows_system_limits_change(store: InMemoryStore) -> None:
    """Test that non-overridden field follows system limits."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(daily_limit=5))
    resolver.set_system_limits(100, 20)

    assert resolver.resolve("u-1") == ResolvedLimits(monthly_limit=100, daily_limit=5)


def test_zero_limit_override(store: InMemoryStore) -> None:
    """Test that zero is a valid override, not a missing one."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(monthly_limit=0))

    assert resolver.resolve("u-1").monthly_limit == 0


def test_update_override_keeps_unset_fields(store: InMemoryStore) -> None:
    """Test that only fields present in changes are updated."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(monthly_limit=100, daily_limit=5))

    updated = resolver.update_override("u-1", LimitOverride(daily_limit=7))

    assert updated == LimitOverride(monthly_limit=100, daily_limit=7)
    assert resolver.override("u-1") == updated


def test_update_override_clears_field_set_to_none(store: InMemoryStore) -> None:
    """Test that field explicitly set to None is removed from override."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(monthly_limit=100, daily_limit=5))

    updated = resolver.update_override("u-1", LimitOverride(monthly_limit=None))

    assert updated == LimitOverride(monthly_limit=None, daily_limit=5)
    assert resolver.resolve("u-1") == ResolvedLimits(monthly_limit=50, daily_limit=5)


def test_update_override_deletes_empty_override(store: InMemoryStore) -> None:
    """Test that override without any field is deleted."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(daily_limit=5))

    assert resolver.update_override("u-1", LimitOverride(daily_limit=None)) is None
    assert resolver.override("u-1") is None
    assert store.get(limit_key("u-1")) is None


def test_delete_override(store: InMemoryStore) -> None:
    """Test deleting override."""
    resolver = LimitResolver(store)
    resolver.update_override("u-1", LimitOverride(daily_limit=5))

    assert resolver.delete_override("u-1") is True
    assert resolver.delete_override("u-1") is False
    assert resolver.resolve("u-1").daily_limit == 10
