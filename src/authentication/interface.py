"""Abstract base class for authentication dependencies.

Contract: subclasses must implement `__call__(request: Request) -> AuthTuple`
where `AuthTuple = (SubjectID, Email, Token)`.
"""

from abc import ABC, abstractmethod

from fastapi import Request

SubjectID = str
Email = str
Token = str

AuthTuple = tuple[SubjectID, Email, Token]


class AuthInterface(ABC):  # pylint: disable=too-few-public-methods
    """Base class for all authentication dependencies."""

    @abstractmethod
    async def __call__(self, request: Request) -> AuthTuple:
        """Validate FastAPI Requests for authentication."""
