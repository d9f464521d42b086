"""Utility functions for endpoint handlers."""

from fastapi import HTTPException, status

from authentication.interface import AuthTuple
from directory.user_directory import UserDirectory
from log import get_logger
from models.usage import UserRecord

logger = get_logger(__name__)


def touch_acting_user(user_directory: UserDirectory, auth: AuthTuple) -> UserRecord:
    """Record activity of the authenticated user.

    The user is added to the directory when it is seen for the first time.
    """
    subject_id, email, _ = auth
    return user_directory.touch(subject_id, email)


def find_user_by_email(user_directory: UserDirectory, email: str) -> UserRecord:
    """Find user by e-mail or fail with 404."""
    user = user_directory.find_by_email(email)
    if user is None:
        logger.info("User with e-mail %s not found", email)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "response": "User not found",
                "cause": f"There is no user with e-mail {email}",
            },
        )
    return user
