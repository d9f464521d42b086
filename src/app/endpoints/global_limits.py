"""Handler for REST API endpoint changing system-wide limits."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from authentication import get_auth_dependency
from authentication.interface import AuthTuple
from authorization.middleware import admin_only
from models.requests import GlobalLimitsRequest
from models.responses import ErrorResponse, GlobalLimitsResponse, LimitsModel
from services.accounting import get_accounting
from utils.endpoints import touch_acting_user

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["admin"])


global_limits_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "System limits changed",
        "model": GlobalLimitsResponse,
    },
    400: {
        "description": "Missing or invalid field in request",
        "model": ErrorResponse,
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


@router.post("/global-limits", responses=global_limits_responses)
@admin_only
async def global_limits_endpoint_handler(
    body: GlobalLimitsRequest,
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> GlobalLimitsResponse:
    """Replace system-wide monthly and daily limits.

    Users with limit override keep their overridden values.
    """
    accounting = get_accounting()
    touch_acting_user(accounting.user_directory, auth)

    limits = accounting.limit_resolver.set_system_limits(body.monthly, body.daily)
    return GlobalLimitsResponse(limits=LimitsModel.from_limits(limits))
