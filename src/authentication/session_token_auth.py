"""Manage authentication flow for FastAPI endpoints with session tokens."""

from typing import Callable

from fastapi import HTTPException, Request, status

from authentication.interface import AuthInterface, AuthTuple
from authentication.session_token import (
    InvalidSignatureError,
    MalformedTokenError,
    SessionTokenCodec,
    SessionTokenError,
    TokenExpiredError,
)
from authentication.utils import extract_user_token
from log import get_logger

logger = get_logger(__name__)


class SessionTokenAuthDependency(AuthInterface):  # pylint: disable=too-few-public-methods
    """Authentication dependency that accepts session tokens issued by this service."""

    def __init__(self, codec_provider: Callable[[], SessionTokenCodec]) -> None:
        """Initialize the dependency.

        Args:
            codec_provider: Callable returning codec configured for the
                deployment. It is called for every request so the dependency
                can be constructed before configuration is loaded.
        """
        self.codec_provider = codec_provider

    async def __call__(self, request: Request) -> AuthTuple:
        """Verify session token from request headers.

        Returns:
            Subject ID, e-mail and the session token itself.
        """
        user_token = extract_user_token(request.headers)
        codec = self.codec_provider()

        try:
            claims = codec.verify(user_token)
        except InvalidSignatureError as exc:
            logger.warning("Rejected session token with invalid signature: %s", exc)
            raise _unauthorized("Invalid token", exc) from exc
        except TokenExpiredError as exc:
            logger.info("Rejected expired session token")
            raise _unauthorized("Token has expired", exc) from exc
        except MalformedTokenError as exc:
            logger.warning("Rejected malformed session token: %s", exc)
            raise _unauthorized("Invalid token", exc) from exc

        logger.debug("Authenticated subject %s", claims.subject_id)
        return claims.subject_id, claims.email, user_token


def _unauthorized(message: str, exc: SessionTokenError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"response": message, "cause": str(exc)},
    )
