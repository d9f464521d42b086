"""Calendar periods used by usage counters."""

from datetime import UTC, datetime
from typing import Optional

from models.usage import QuotaRecord
from utils.clock import utc_now

MONTH_FORMAT = "%Y-%m"
DAY_FORMAT = "%Y-%m-%d"


def _in_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return utc_now()
    # naive timestamps are considered to be in UTC already
    return now.astimezone(UTC) if now.tzinfo is not None else now


def month_period(now: Optional[datetime] = None) -> str:
    """Return month period in YYYY-MM format for given time."""
    return _in_utc(now).strftime(MONTH_FORMAT)


def day_period(now: Optional[datetime] = None) -> str:
    """Return day period in YYYY-MM-DD format for given time."""
    return _in_utc(now).strftime(DAY_FORMAT)


def rolled_over(record: QuotaRecord, now: Optional[datetime] = None) -> QuotaRecord:
    """Return quota record valid for the periods containing given time.

    Monthly and daily counters are handled independently: a counter is reset
    to zero when its stored period differs from the current one. The original
    record is not modified.

    Args:
        record: Quota record as read from storage.
        now: Time to compute periods for, current time is used by default.

    Returns:
        New quota record with current periods.
    """
    now = now or utc_now()
    current_month = month_period(now)
    current_day = day_period(now)

    rolled = record.model_copy()
    if rolled.monthly_period != current_month:
        rolled.monthly_count = 0
        rolled.monthly_period = current_month
    if rolled.daily_period != current_day:
        rolled.daily_count = 0
        rolled.daily_period = current_day
    return rolled
