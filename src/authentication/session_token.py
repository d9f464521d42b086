"""Session tokens issued in exchange for verified identity.

Session token is a JWT signed by HMAC-SHA256 with process-wide secret. It
carries subject ID, e-mail, time of issue and time of expiration. Tokens are
signed, not encrypted, and there's no revocation list: token is valid until it
expires. Key rotation is not supported, tokens do not contain key ID.
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from authlib.jose import JsonWebToken
from authlib.jose.errors import (
    BadSignatureError,
    DecodeError,
    ExpiredTokenError,
    JoseError,
)
from pydantic import BaseModel, Field

import constants
from utils.clock import utc_now


class SessionTokenError(Exception):
    """Base class for all errors raised when session token is not accepted."""


class InvalidSignatureError(SessionTokenError):
    """Signature of session token does not match."""


class TokenExpiredError(SessionTokenError):
    """Session token has expired."""


class MalformedTokenError(SessionTokenError):
    """Session token can not be parsed or lacks required claims."""


class SessionClaims(BaseModel):
    """Claims carried by session token."""

    subject_id: str = Field(description="Subject ID of the token holder")
    email: str = Field(description="E-mail of the token holder")
    issued_at: datetime
    expires_at: datetime


class IssuedToken(BaseModel):
    """Session token together with its claims."""

    token: str
    claims: SessionClaims
    expires_in: int = Field(description="Token lifetime in seconds")


class SessionTokenCodec:
    """Signs and verifies session tokens."""

    def __init__(
        self,
        secret: str,
        ttl: int = constants.DEFAULT_SESSION_TOKEN_TTL,
        issuer: Optional[str] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize codec with signing secret and token lifetime in seconds."""
        self._secret = secret.encode("utf-8")
        self.ttl = ttl
        self.issuer = issuer
        self.clock = clock
        self._jwt = JsonWebToken([constants.SESSION_TOKEN_ALGORITHM])

    def _claims_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {
            "sub": {"essential": True},
            constants.SESSION_TOKEN_EMAIL_CLAIM: {"essential": True},
            "iat": {"essential": True},
            "exp": {"essential": True},
        }
        if self.issuer is not None:
            options["iss"] = {"essential": True, "value": self.issuer}
        return options

    def issue(self, subject_id: str, email: str) -> IssuedToken:
        """Issue new session token for given subject."""
        issued_at = self.clock().replace(microsecond=0)
        expires_at = issued_at + timedelta(seconds=self.ttl)

        payload: dict[str, Any] = {
            "sub": subject_id,
            constants.SESSION_TOKEN_EMAIL_CLAIM: email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if self.issuer is not None:
            payload["iss"] = self.issuer

        header = {"alg": constants.SESSION_TOKEN_ALGORITHM, "typ": "JWT"}
        token = self._jwt.encode(header, payload, self._secret).decode("utf-8")

        return IssuedToken(
            token=token,
            claims=SessionClaims(
                subject_id=subject_id,
                email=email,
                issued_at=issued_at,
                expires_at=expires_at,
            ),
            expires_in=self.ttl,
        )

    def verify(self, token: str) -> SessionClaims:
        """Verify session token and return its claims.

        Raises:
            InvalidSignatureError: If the signature does not match.
            TokenExpiredError: If the token has expired.
            MalformedTokenError: If the token can not be parsed.
        """
        try:
            claims = self._jwt.decode(
                token, self._secret, claims_options=self._claims_options()
            )
        except BadSignatureError as exc:
            raise InvalidSignatureError("Invalid token: bad signature") from exc
        except DecodeError as exc:
            raise MalformedTokenError("Invalid token: decode error") from exc
        except JoseError as exc:
            # eg. unsupported algorithm in header
            raise InvalidSignatureError(f"Invalid token: {exc.error}") from exc
        except (ValueError, TypeError) as exc:
            raise MalformedTokenError("Invalid token: decode error") from exc

        try:
            claims.validate(now=int(self.clock().timestamp()))
        except ExpiredTokenError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JoseError as exc:
            raise MalformedTokenError(f"Error validating token: {exc}") from exc

        try:
            return SessionClaims(
                subject_id=str(claims["sub"]),
                email=str(claims[constants.SESSION_TOKEN_EMAIL_CLAIM]),
                issued_at=claims["iat"],
                expires_at=claims["exp"],
            )
        except (KeyError, ValueError) as exc:
            raise MalformedTokenError("Token claims have invalid format") from exc
