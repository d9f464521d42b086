"""Identity verifier that accepts any assertion.

Intended for local/dev use only, do not use in production.
"""

from typing import Optional

from identity.interface import IdentityVerifier, VerifiedIdentity
from log import get_logger

logger = get_logger(__name__)


class NoopIdentityVerifier(IdentityVerifier):  # pylint: disable=too-few-public-methods
    """Verifier that trusts identity claimed by the client."""

    async def verify(
        self,
        assertion: str,
        subject_id: str,
        email: str,
        display_name: Optional[str] = None,
    ) -> VerifiedIdentity:
        """Return the claimed identity without any verification."""
        logger.warning(
            "No-op identity verifier is being used. "
            "The service is running in insecure mode intended solely for development purposes"
        )
        return VerifiedIdentity(
            subject_id=subject_id, email=email, display_name=display_name
        )
