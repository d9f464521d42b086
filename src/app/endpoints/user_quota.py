"""Handler for REST API endpoint reporting usage of the calling user."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from authentication import get_auth_dependency
from authentication.interface import AuthTuple
from models.responses import ErrorResponse, UserQuotaResponse
from quota.periods import day_period, month_period
from services.accounting import get_accounting
from utils.clock import utc_now
from utils.endpoints import touch_acting_user

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["quota"])


user_quota_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Current usage and limits",
        "model": UserQuotaResponse,
    },
    401: {
        "description": "Missing or invalid credentials provided by client",
        "model": ErrorResponse,
    },
}


@router.get("/user-quota", responses=user_quota_responses)
async def user_quota_endpoint_handler(
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> UserQuotaResponse:
    """Return usage of the authenticated user in current month and day."""
    accounting = get_accounting()
    now = utc_now()
    user = touch_acting_user(accounting.user_directory, auth)
    usage = accounting.quota_ledger.usage(user.subject_id, now)

    return UserQuotaResponse(
        usage=usage.record.monthly_count,
        limit=usage.limits.monthly_limit,
        daily_usage=usage.record.daily_count,
        daily_limit=usage.limits.daily_limit,
        month=month_period(now),
        day=day_period(now),
    )
