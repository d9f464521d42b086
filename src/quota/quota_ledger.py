"""Ledger with monthly and daily usage counters of all users."""

from datetime import datetime
from typing import Optional

import constants
from kvstore.store import KeyValueStore
from log import get_logger
from models.usage import QuotaCheckResult, QuotaRecord, UserUsage
from quota.daily_stats import DailyStats
from quota.limit_resolver import LimitResolver
from quota.periods import rolled_over
from quota.quota_exceed_error import QuotaExceedError
from utils.clock import utc_now

logger = get_logger(__name__)


def quota_key(subject_id: str) -> str:
    """Construct key of quota record for given subject."""
    return f"{constants.QUOTA_KEY_PREFIX}{subject_id}"


def evaluate_usage(usage: UserUsage) -> QuotaCheckResult:
    """Compare usage counters with limits, monthly limit goes first."""
    if usage.record.monthly_count >= usage.limits.monthly_limit:
        return QuotaCheckResult.MONTHLY_EXCEEDED
    if usage.record.daily_count >= usage.limits.daily_limit:
        return QuotaCheckResult.DAILY_EXCEEDED
    return QuotaCheckResult.ALLOWED


class QuotaLedger:
    """Ledger with monthly and daily usage counters of all users.

    Quota is checked before generation, but counters are increased only after
    the generation succeeded, so failed generation does not consume quota.
    """

    def __init__(
        self,
        store: KeyValueStore,
        limit_resolver: LimitResolver,
        daily_stats: DailyStats,
    ) -> None:
        """Initialize quota ledger."""
        self.store = store
        self.limit_resolver = limit_resolver
        self.daily_stats = daily_stats

    def read(self, subject_id: str, now: Optional[datetime] = None) -> QuotaRecord:
        """Read quota record for given subject with rollover applied.

        Zero record is returned for subjects without any usage. The rolled
        over record is not written back, it is stored by the next commit.
        """
        value = self.store.get(quota_key(subject_id))
        record = (
            QuotaRecord.model_validate_json(value)
            if value is not None
            else QuotaRecord()
        )
        return rolled_over(record, now)

    def usage(self, subject_id: str, now: Optional[datetime] = None) -> UserUsage:
        """Retrieve current usage of given subject together with its limits."""
        return UserUsage(
            record=self.read(subject_id, now),
            limits=self.limit_resolver.resolve(subject_id),
        )

    def check_and_reserve(
        self, subject_id: str, now: Optional[datetime] = None
    ) -> QuotaCheckResult:
        """Check if subject can make one more request.

        Monthly quota is checked before daily quota. Counters are not
        increased, call `commit` once the request succeeded.
        """
        return evaluate_usage(self.usage(subject_id, now))

    def ensure_available_quota(
        self, subject_id: str, now: Optional[datetime] = None
    ) -> None:
        """Ensure that there's available quota left.

        Raises:
            QuotaExceedError: If monthly or daily quota has been exceeded.
        """
        usage = self.usage(subject_id, now)
        result = evaluate_usage(usage)
        logger.info(
            "Quota check for subject %s: %s (monthly %d/%d, daily %d/%d)",
            subject_id,
            result.value,
            usage.record.monthly_count,
            usage.limits.monthly_limit,
            usage.record.daily_count,
            usage.limits.daily_limit,
        )
        match result:
            case QuotaCheckResult.MONTHLY_EXCEEDED:
                raise QuotaExceedError(
                    subject_id,
                    result,
                    usage.record.monthly_count,
                    usage.limits.monthly_limit,
                )
            case QuotaCheckResult.DAILY_EXCEEDED:
                raise QuotaExceedError(
                    subject_id,
                    result,
                    usage.record.daily_count,
                    usage.limits.daily_limit,
                )

    def commit(self, subject_id: str, now: Optional[datetime] = None) -> QuotaRecord:
        """Count one successful request made by given subject.

        Both counters are increased and the whole record is written at once.
        The global statistic for current day is increased too.

        Returns:
            Updated quota record.
        """
        now = now or utc_now()
        record = self.read(subject_id, now)
        record.monthly_count += 1
        record.daily_count += 1
        self.store.put(quota_key(subject_id), record.model_dump_json())
        self.daily_stats.increment(now)
        logger.debug(
            "Usage of subject %s: %d this month, %d today",
            subject_id,
            record.monthly_count,
            record.daily_count,
        )
        return record

    def delete(self, subject_id: str) -> bool:
        """Delete quota record of given subject."""
        return self.store.delete(quota_key(subject_id))
