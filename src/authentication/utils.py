"""Authentication utility functions."""

from fastapi import HTTPException, status
from starlette.datastructures import Headers


def extract_user_token(headers: Headers) -> str:
    """Extract the bearer token from an HTTP authorization header.

    Args:
        headers: The request headers.

    Returns:
        The extracted token.

    Raises:
        HTTPException: With status 401 when the header is missing or does not
            contain bearer token.
    """
    authorization_header = headers.get("Authorization")
    if not authorization_header:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "response": "Missing authorization",
                "cause": "No Authorization header found",
            },
        )

    scheme_and_token = authorization_header.strip().split()
    if len(scheme_and_token) != 2 or scheme_and_token[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "response": "Missing authorization",
                "cause": "No token found in Authorization header",
            },
        )

    return scheme_and_token[1]
