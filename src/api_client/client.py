"""Client of WordGarden usage service REST API."""

from typing import Any, Optional

import aiohttp

from api_client.errors import ApiError, QuotaExceededApiError
from api_client.session import ApiSession
from log import get_logger

logger = get_logger(__name__)


class WordGardenClient:
    """Client of WordGarden usage service REST API.

    The HTTP session is owned by the caller, so one connection pool can be
    shared by many clients.
    """

    def __init__(self, base_url: str, http_session: aiohttp.ClientSession) -> None:
        """Initialize the client.

        Args:
            base_url: URL of the service, eg. http://localhost:8080
            http_session: aiohttp session used for all requests.
        """
        self.base_url = base_url.rstrip("/")
        self.http_session = http_session

    async def _request(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        json: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        async with self.http_session.request(
            method, url, headers=headers, json=json
        ) as resp:
            try:
                body = await resp.json(content_type=None)
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}

            if resp.status == 429:
                raise QuotaExceededApiError(
                    body.get("error", "quota exceeded"), body.get("quota")
                )
            if resp.status >= 400:
                raise ApiError(resp.status, body.get("error", resp.reason or ""))
            return body

    async def exchange_token(
        self,
        identity_token: str,
        subject_id: str,
        email: str,
        name: Optional[str] = None,
    ) -> ApiSession:
        """Exchange identity token for session."""
        payload: dict[str, Any] = {"subjectId": subject_id, "email": email}
        if name is not None:
            payload["name"] = name
        body = await self._request(
            "POST",
            "/api/exchange-token",
            {"Authorization": f"Bearer {identity_token}"},
            payload,
        )
        return ApiSession.from_expires_in(body["sessionToken"], body["expiresIn"])

    async def generate(
        self,
        session: ApiSession,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Generate text, consumes one request from user quota."""
        payload: dict[str, Any] = {"prompt": prompt}
        if max_tokens is not None:
            payload["maxTokens"] = max_tokens
        if temperature is not None:
            payload["temperature"] = temperature
        body = await self._request(
            "POST", "/v1/generate", session.authorization_header(), payload
        )
        return body["result"]

    async def user_quota(self, session: ApiSession) -> dict[str, Any]:
        """Retrieve usage and limits of the session user."""
        return await self._request(
            "GET", "/api/user-quota", session.authorization_header()
        )

    async def dashboard(self, session: ApiSession) -> dict[str, Any]:
        """Retrieve admin dashboard snapshot."""
        return await self._request(
            "GET", "/api/dashboard", session.authorization_header()
        )

    async def add_user(
        self,
        session: ApiSession,
        email: str,
        name: Optional[str] = None,
        monthly: Optional[int] = None,
        daily: Optional[int] = None,
    ) -> dict[str, Any]:
        """Add user manually, returns the new user."""
        payload: dict[str, Any] = {"email": email}
        for field, value in (("name", name), ("monthly", monthly), ("daily", daily)):
            if value is not None:
                payload[field] = value
        body = await self._request(
            "POST", "/api/user-add", session.authorization_header(), payload
        )
        return body["user"]

    async def delete_user(self, session: ApiSession, email: str) -> None:
        """Delete user with given e-mail."""
        await self._request(
            "POST",
            "/api/user-delete",
            session.authorization_header(),
            {"email": email},
        )

    async def set_user_limits(
        self, session: ApiSession, email: str, **limits: Optional[int]
    ) -> dict[str, int]:
        """Change limits of one user.

        Accepts `monthly` and `daily` keyword arguments. Only passed limits are
        changed, a limit passed as None is reset to the system limit.
        """
        unknown = set(limits) - {"monthly", "daily"}
        if unknown:
            raise TypeError(f"Unexpected limits: {', '.join(sorted(unknown))}")
        body = await self._request(
            "POST",
            "/api/user-limit",
            session.authorization_header(),
            {"email": email, **limits},
        )
        return body["limits"]

    async def set_global_limits(
        self, session: ApiSession, monthly: int, daily: int
    ) -> dict[str, int]:
        """Replace system-wide limits."""
        body = await self._request(
            "POST",
            "/api/global-limits",
            session.authorization_header(),
            {"monthly": monthly, "daily": daily},
        )
        return body["limits"]
