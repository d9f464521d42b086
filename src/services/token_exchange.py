"""Exchange of identity assertion for session token."""

from typing import Optional

import metrics
from authentication.session_token import IssuedToken, SessionTokenCodec
from directory.user_directory import UserDirectory
from identity.interface import IdentityVerificationError, IdentityVerifier
from log import get_logger

logger = get_logger(__name__)


async def exchange_token(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    verifier: IdentityVerifier,
    codec: SessionTokenCodec,
    user_directory: UserDirectory,
    assertion: str,
    subject_id: str,
    email: str,
    display_name: Optional[str] = None,
) -> IssuedToken:
    """Verify identity assertion and issue session token for its subject.

    The user is recorded in the directory before the token is issued, so the
    user shows up on the dashboard right after the first login.

    Raises:
        IdentityVerificationError: If the assertion was not accepted.
    """
    try:
        identity = await verifier.verify(assertion, subject_id, email, display_name)
    except IdentityVerificationError as exc:
        logger.warning("Identity verification of %s failed: %s", subject_id, exc)
        metrics.token_exchanges_total.labels("failure").inc()
        raise

    user_directory.touch(identity.subject_id, identity.email, identity.display_name)
    issued = codec.issue(identity.subject_id, identity.email)

    logger.info("Session token issued for %s", identity.subject_id)
    metrics.token_exchanges_total.labels("success").inc()
    return issued
