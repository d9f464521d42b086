"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from configuration import configuration
from kvstore.in_memory_store import InMemoryStore
from models.config import QuotaConfiguration
from services.accounting import Accounting, build_accounting
from tests.unit import config_dict

# Monday morning in the second half of the month
NOW = datetime(2024, 5, 20, 8, 15, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def unit_configuration_fixture() -> None:
    """Initialize configuration before every unit test.

    Integration tests load their own configuration into the same singleton,
    so it needs to be initialized again regardless of test order.
    """
    configuration.init_from_dict(config_dict)


@pytest.fixture(name="now")
def now_fixture() -> datetime:
    """Fixed point in time used by tests of usage accounting."""
    return NOW


@pytest.fixture(name="store")
def store_fixture() -> InMemoryStore:
    """Empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture(name="accounting")
def accounting_fixture(store: InMemoryStore) -> Accounting:
    """Accounting components with default limits 50/10 backed by in-memory store."""
    return build_accounting(store, QuotaConfiguration())
