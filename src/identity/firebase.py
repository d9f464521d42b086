"""Verification of Firebase ID tokens.

The ID token is sent to Identity Toolkit `accounts:lookup` endpoint. The token
is accepted when the endpoint answers with an account whose `localId` is the
subject ID claimed by the client and that has a verified e-mail address.
"""

from typing import Any, Optional

import aiohttp

from identity.interface import (
    IdentityVerificationError,
    IdentityVerifier,
    VerifiedIdentity,
)
from log import get_logger
from models.config import FirebaseConfiguration

logger = get_logger(__name__)


class FirebaseIdentityVerifier(IdentityVerifier):  # pylint: disable=too-few-public-methods
    """Verifier of Firebase ID tokens."""

    def __init__(self, config: FirebaseConfiguration, timeout: int) -> None:
        """Initialize the verifier.

        Args:
            config: Firebase project configuration.
            timeout: Timeout of the lookup request in seconds.
        """
        self.config = config
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _lookup(self, assertion: str) -> dict[str, Any]:
        params = {"key": self.config.api_key.get_secret_value()}
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(
                str(self.config.url), params=params, json={"idToken": assertion}
            ) as resp:
                if resp.status != 200:
                    raise IdentityVerificationError(
                        f"Identity provider rejected the token with status {resp.status}"
                    )
                try:
                    data = await resp.json()
                except ValueError as exc:
                    logger.error("Identity provider returned invalid JSON: %s", exc)
                    raise IdentityVerificationError(
                        "Identity provider returned malformed response"
                    ) from exc
        if not isinstance(data, dict):
            logger.error(
                "Identity provider returned %s instead of object", type(data).__name__
            )
            raise IdentityVerificationError(
                "Identity provider returned malformed response"
            )
        return data

    async def verify(
        self,
        assertion: str,
        subject_id: str,
        email: str,
        display_name: Optional[str] = None,
    ) -> VerifiedIdentity:
        """Verify Firebase ID token issued for given subject.

        Only the e-mail address confirmed by the identity provider is used,
        the address sent by the client is ignored.
        """
        try:
            data = await self._lookup(assertion)
        except (aiohttp.ClientError, TimeoutError) as exc:
            logger.error("Unable to reach identity provider: %s", exc)
            raise IdentityVerificationError(
                "Unable to reach identity provider"
            ) from exc

        users = data.get("users") or []
        if not users or not isinstance(users[0], dict):
            raise IdentityVerificationError("Identity provider returned no account")

        account = users[0]
        if account.get("localId") != subject_id:
            logger.warning(
                "Identity token belongs to %s, but %s was claimed",
                account.get("localId"),
                subject_id,
            )
            raise IdentityVerificationError("Identity token subject mismatch")

        verified_email = account.get("email")
        if not verified_email:
            logger.warning("Account %s has no e-mail address", subject_id)
            raise IdentityVerificationError("Account has no e-mail address")
        if account.get("emailVerified") is not True:
            logger.warning(
                "E-mail address %s of account %s is not verified",
                verified_email,
                subject_id,
            )
            raise IdentityVerificationError("E-mail address is not verified")
        if verified_email.lower() != email.strip().lower():
            logger.info(
                "Account %s claimed e-mail %s, provider returned %s",
                subject_id,
                email,
                verified_email,
            )

        return VerifiedIdentity(
            subject_id=subject_id,
            email=verified_email,
            display_name=display_name or account.get("displayName"),
        )
