"""Construction of usage accounting components backed by configured storage."""

from dataclasses import dataclass

from configuration import configuration
from directory.user_directory import UserDirectory
from kvstore.store import KeyValueStore
from models.config import QuotaConfiguration
from models.usage import SystemLimits
from quota.daily_stats import DailyStats
from quota.limit_resolver import LimitResolver
from quota.quota_ledger import QuotaLedger


@dataclass
class Accounting:
    """Components sharing one key-value store."""

    limit_resolver: LimitResolver
    daily_stats: DailyStats
    quota_ledger: QuotaLedger
    user_directory: UserDirectory


def build_accounting(
    store: KeyValueStore, quota_configuration: QuotaConfiguration
) -> Accounting:
    """Wire limit resolver, statistics, ledger and directory together."""
    limit_resolver = LimitResolver(
        store,
        SystemLimits(
            monthly_limit=quota_configuration.default_monthly_limit,
            daily_limit=quota_configuration.default_daily_limit,
        ),
    )
    daily_stats = DailyStats(store)
    quota_ledger = QuotaLedger(store, limit_resolver, daily_stats)
    user_directory = UserDirectory(store, limit_resolver, quota_ledger)
    return Accounting(
        limit_resolver=limit_resolver,
        daily_stats=daily_stats,
        quota_ledger=quota_ledger,
        user_directory=user_directory,
    )


def get_accounting() -> Accounting:
    """Retrieve accounting components for the configured store."""
    return build_accounting(configuration.kv_store, configuration.quota_configuration)
