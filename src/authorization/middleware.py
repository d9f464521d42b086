"""Authorization middleware and decorators."""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException, status

from configuration import configuration
from log import get_logger

logger = get_logger(__name__)


def _perform_admin_check(kwargs: dict[str, Any]) -> None:
    """Check that the authenticated user is in the admin allow-list."""
    try:
        subject_id, email, _ = kwargs["auth"]
    except KeyError as exc:
        logger.error(
            "Authorization only allowed on endpoints that accept "
            "'auth: Any = Depends(get_auth_dependency())'"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "response": "Internal server error",
                "cause": "Endpoint does not accept authentication",
            },
        ) from exc

    if not configuration.authorization_configuration.is_admin(email):
        logger.warning("User %s (%s) is not an admin", subject_id, email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "response": "Forbidden",
                "cause": f"User {email} is not allowed to perform admin actions",
            },
        )


def admin_only(func: Callable) -> Callable:
    """Allow only administrators to call an endpoint."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        _perform_admin_check(kwargs)
        return await func(*args, **kwargs)

    return wrapper
