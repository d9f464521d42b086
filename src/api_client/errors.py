"""Errors reported by WordGarden usage service."""

from typing import Optional


class ApiError(Exception):
    """Service responded with an error status."""

    def __init__(self, status: int, message: str) -> None:
        """Construct exception object."""
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


class QuotaExceededApiError(ApiError):
    """Monthly or daily quota of the user has been exceeded."""

    def __init__(self, message: str, quota: Optional[str] = None) -> None:
        """Construct exception object, `quota` is either monthly or daily."""
        super().__init__(429, message)
        self.quota = quota
