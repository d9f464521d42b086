"""This package contains authentication code and modules."""

from authentication.interface import AuthInterface
from authentication.session_token import SessionTokenCodec
from authentication.session_token_auth import SessionTokenAuthDependency
from configuration import configuration
from log import get_logger

logger = get_logger(__name__)


def get_session_token_codec() -> SessionTokenCodec:
    """Construct session token codec from configuration."""
    session_configuration = configuration.session_configuration
    return SessionTokenCodec(
        secret=session_configuration.secret.get_secret_value(),
        ttl=session_configuration.ttl,
        issuer=session_configuration.issuer,
    )


def get_auth_dependency() -> AuthInterface:
    """Select the authentication dependency used by protected endpoints."""
    logger.debug("Initializing session token authentication dependency")
    return SessionTokenAuthDependency(get_session_token_codec)
