"""Unit tests for models of stored records."""

import pytest
from pydantic import ValidationError

from models.usage import LimitOverride, QuotaCheckResult, QuotaRecord, UserRecord


def test_user_record_defaults() -> None:
    """Test that user record defaults to never active, not manually added."""
    record = UserRecord(subject_id="u-1", email="jo@example.com")
    assert record.last_active == "Never"
    assert record.manually_added is False
    assert record.display_name is None


def test_stored_record_ignores_unknown_fields() -> None:
    """Test that records written by newer version can be read."""
    record = QuotaRecord.model_validate_json(
        '{"monthly_count": 3, "monthly_period": "2024-05", "hourly_count": 1}'
    )
    assert record.monthly_count == 3
    assert record.daily_count == 0


def test_quota_record_counters_are_not_negative() -> None:
    """Test that negative counter is rejected."""
    with pytest.raises(ValidationError):
        QuotaRecord(monthly_count=-1)


def test_limit_override_is_empty() -> None:
    """Test detection of override without any field."""
    assert LimitOverride().is_empty() is True
    assert LimitOverride(monthly_limit=0).is_empty() is False
    assert LimitOverride(daily_limit=5).is_empty() is False


def test_quota_check_result_values() -> None:
    """Test values reported to clients."""
    assert QuotaCheckResult.ALLOWED.value == "allowed"
    assert QuotaCheckResult.MONTHLY_EXCEEDED.value == "monthly"
    assert QuotaCheckResult.DAILY_EXCEEDED.value == "daily"
