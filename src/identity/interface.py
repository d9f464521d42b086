"""Abstract base class for identity verifiers."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class IdentityVerificationError(Exception):
    """Identity assertion was not accepted or could not be verified."""


class VerifiedIdentity(BaseModel):
    """Identity confirmed by identity provider."""

    subject_id: str
    email: str
    display_name: Optional[str] = None


class IdentityVerifier(ABC):  # pylint: disable=too-few-public-methods
    """Base class for all identity verifiers."""

    @abstractmethod
    async def verify(
        self,
        assertion: str,
        subject_id: str,
        email: str,
        display_name: Optional[str] = None,
    ) -> VerifiedIdentity:
        """Verify identity assertion issued for given subject.

        Raises:
            IdentityVerificationError: If the assertion is not valid for the
                subject or the identity provider can not be reached.
        """
