"""Handlers for REST API endpoints managing users and their limits."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from authentication import get_auth_dependency
from authentication.interface import AuthTuple
from authorization.middleware import admin_only
from directory.errors import DuplicateEmailError, UserNotFoundError
from models.requests import UserAddRequest, UserDeleteRequest, UserLimitRequest
from models.responses import (
    ErrorResponse,
    LimitsModel,
    SuccessResponse,
    UserAddResponse,
    UserLimitResponse,
    UserModel,
)
from services.accounting import get_accounting
from utils.endpoints import find_user_by_email, touch_acting_user

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["admin"])


common_admin_responses: dict[int | str, dict[str, Any]] = {
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

user_add_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "User added",
        "model": UserAddResponse,
    },
    **common_admin_responses,
    409: {
        "description": "User with the same e-mail already exists",
        "model": ErrorResponse,
    },
}

user_delete_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "User deleted",
        "model": SuccessResponse,
    },
    **common_admin_responses,
    404: {
        "description": "User not found",
        "model": ErrorResponse,
    },
}

user_limit_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "User limits changed",
        "model": UserLimitResponse,
    },
    **common_admin_responses,
    404: {
        "description": "User not found",
        "model": ErrorResponse,
    },
}


@router.post("/user-add", responses=user_add_responses)
@admin_only
async def user_add_endpoint_handler(
    body: UserAddRequest,
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> UserAddResponse:
    """Add user manually, optionally with limit override."""
    accounting = get_accounting()
    touch_acting_user(accounting.user_directory, auth)

    try:
        user = accounting.user_directory.add(
            body.email,
            name=body.name,
            monthly_limit=body.monthly,
            daily_limit=body.daily,
        )
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"response": "User already exists", "cause": str(e)},
        ) from e

    limits = accounting.limit_resolver.resolve(user.subject_id)
    return UserAddResponse(user=UserModel.from_record(user, limits))


@router.post("/user-delete", responses=user_delete_responses)
@admin_only
async def user_delete_endpoint_handler(
    body: UserDeleteRequest,
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> SuccessResponse:
    """Delete user together with their usage and limit override."""
    accounting = get_accounting()
    touch_acting_user(accounting.user_directory, auth)

    try:
        accounting.user_directory.remove(body.email)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"response": "User not found", "cause": str(e)},
        ) from e

    return SuccessResponse(success=True)


@router.post("/user-limit", responses=user_limit_responses)
@admin_only
async def user_limit_endpoint_handler(
    body: UserLimitRequest,
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> UserLimitResponse:
    """Change monthly and/or daily limit of one user.

    Limits missing in the request are not changed, limits set to null are
    reset to system limits.
    """
    accounting = get_accounting()
    touch_acting_user(accounting.user_directory, auth)

    user = find_user_by_email(accounting.user_directory, body.email)
    accounting.limit_resolver.update_override(user.subject_id, body.to_override())

    limits = accounting.limit_resolver.resolve(user.subject_id)
    return UserLimitResponse(email=user.email, limits=LimitsModel.from_limits(limits))
