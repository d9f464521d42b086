"""Time source used by the service."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return current time in UTC timezone.

    All periods, timestamps and token lifetimes are computed in UTC.
    """
    return datetime.now(UTC)
