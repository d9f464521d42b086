"""Global daily statistics of successful generations."""

from datetime import datetime, timedelta
from typing import Optional

import constants
from kvstore.store import KeyValueStore
from models.usage import DailyStat
from quota.periods import day_period
from utils.clock import utc_now


def daily_stats_key(date: str) -> str:
    """Construct key of statistic for given date."""
    return f"{constants.DAILY_STATS_KEY_PREFIX}{date}"


class DailyStats:
    """Per-date counters of successful generations made by all users."""

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize daily statistics."""
        self.store = store

    def count(self, date: str) -> int:
        """Retrieve number of generations made on given date."""
        value = self.store.get(daily_stats_key(date))
        if value is None:
            return 0
        return DailyStat.model_validate_json(value).count

    def increment(self, now: Optional[datetime] = None) -> int:
        """Increment counter for the date of given time.

        Returns:
            New counter value.
        """
        date = day_period(now)
        stat = DailyStat(date=date, count=self.count(date) + 1)
        self.store.put(daily_stats_key(date), stat.model_dump_json())
        return stat.count

    def window(
        self,
        days: int = constants.DEFAULT_STATS_WINDOW_DAYS,
        now: Optional[datetime] = None,
    ) -> list[DailyStat]:
        """Retrieve statistics for trailing window of days ending today.

        Dates without any generation are reported with zero count.

        Returns:
            Exactly `days` statistics ordered from the oldest to the newest.
        """
        now = now or utc_now()
        dates = [day_period(now - timedelta(days=offset)) for offset in range(days)]
        return [DailyStat(date=date, count=self.count(date)) for date in reversed(dates)]
