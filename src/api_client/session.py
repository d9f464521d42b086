"""Session with WordGarden usage service."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from utils.clock import utc_now

# session is considered expired a bit sooner to avoid using token that
# expires while the request is in flight
DEFAULT_EXPIRATION_BUFFER = timedelta(seconds=300)


class ApiSession(BaseModel):
    """Session token together with time of its expiration."""

    token: str
    expires_at: datetime

    @classmethod
    def from_expires_in(
        cls, token: str, expires_in: int, now: Optional[datetime] = None
    ) -> "ApiSession":
        """Construct session from token lifetime reported by the service."""
        return cls(
            token=token,
            expires_at=(now or utc_now()) + timedelta(seconds=expires_in),
        )

    def is_valid(
        self,
        now: Optional[datetime] = None,
        buffer: timedelta = DEFAULT_EXPIRATION_BUFFER,
    ) -> bool:
        """Check if the session can still be used."""
        return (now or utc_now()) + buffer < self.expires_at

    def authorization_header(self) -> dict[str, str]:
        """Return HTTP header with the session token."""
        return {"Authorization": f"Bearer {self.token}"}
