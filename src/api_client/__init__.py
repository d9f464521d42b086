"""Async client of WordGarden usage service.

Session token is not cached by the client, it is kept in `ApiSession` value
owned by the caller and passed to every call explicitly.
"""

from api_client.client import WordGardenClient
from api_client.errors import ApiError, QuotaExceededApiError
from api_client.session import ApiSession

__all__ = ["ApiError", "ApiSession", "QuotaExceededApiError", "WordGardenClient"]
