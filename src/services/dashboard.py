"""Admin dashboard snapshot assembled from directory, ledger and statistics."""

from datetime import datetime
from typing import Optional

import constants
from log import get_logger
from models.responses import DashboardResponse, LimitsModel, UserModel
from quota.periods import day_period
from services.accounting import Accounting
from utils.clock import utc_now

logger = get_logger(__name__)


def dashboard_snapshot(
    accounting: Accounting,
    now: Optional[datetime] = None,
    window_days: int = constants.DEFAULT_STATS_WINDOW_DAYS,
) -> DashboardResponse:
    """Assemble usage of all users, system limits and global statistics.

    The snapshot is not consistent: records are read one by one while other
    requests may update them.
    """
    now = now or utc_now()
    today = day_period(now)

    rows = []
    for user in accounting.user_directory.list():
        usage = accounting.quota_ledger.usage(user.subject_id, now)
        rows.append(
            UserModel.from_record(
                user,
                usage.limits,
                monthly_usage=usage.record.monthly_count,
                daily_usage=usage.record.daily_count,
            )
        )

    logger.debug("Dashboard snapshot with %d users", len(rows))
    return DashboardResponse(
        users=rows,
        system_limits=LimitsModel.from_limits(
            accounting.limit_resolver.system_limits()
        ),
        daily_stats=accounting.daily_stats.window(window_days, now),
        total_users=len(rows),
        active_today=sum(1 for row in rows if row.last_active.startswith(today)),
        total_requests=sum(row.monthly_usage for row in rows),
    )
