"""Handler for REST API endpoint with admin dashboard data."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from authentication import get_auth_dependency
from authentication.interface import AuthTuple
from authorization.middleware import admin_only
from configuration import configuration
from models.responses import DashboardResponse, ErrorResponse
from services.accounting import get_accounting
from services.dashboard import dashboard_snapshot
from utils.endpoints import touch_acting_user

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["admin"])


dashboard_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Usage of all users and global statistics",
        "model": DashboardResponse,
    },
    401: {
        "description": "Missing or invalid credentials provided by client",
        "model": ErrorResponse,
    },
    403: {
        "description": "Client is not an administrator",
        "model": ErrorResponse,
    },
}


@router.get("/dashboard", responses=dashboard_responses)
@admin_only
async def dashboard_endpoint_handler(
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> DashboardResponse:
    """Return usage of all users, system limits and daily statistics."""
    accounting = get_accounting()
    touch_acting_user(accounting.user_directory, auth)
    return dashboard_snapshot(
        accounting,
        window_days=configuration.quota_configuration.stats_window_days,
    )
