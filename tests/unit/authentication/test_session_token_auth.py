"""Unit tests for SessionTokenAuthDependency class."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import HTTPException, Request

from authentication.session_token import SessionTokenCodec
from authentication.session_token_auth import SessionTokenAuthDependency

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


def make_request(authorization: str | None) -> Request:
    """Construct request with optional Authorization header."""
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("utf-8")))
    return Request(scope={"type": "http", "headers": headers})


@pytest.fixture(name="codec")
def codec_fixture() -> SessionTokenCodec:
    """Codec used to issue and verify tokens."""
    return SessionTokenCodec(SECRET)


@pytest.mark.asyncio
async def test_valid_token(codec: SessionTokenCodec) -> None:
    """Test that valid token resolves to auth tuple."""
    token = codec.issue("u-1", "jo@example.com").token
    dependency = SessionTokenAuthDependency(lambda: codec)

    auth = await dependency(make_request(f"Bearer {token}"))

    assert auth == ("u-1", "jo@example.com", token)


@pytest.mark.asyncio
async def test_missing_header(codec: SessionTokenCodec) -> None:
    """Test that request without Authorization header is rejected."""
    dependency = SessionTokenAuthDependency(lambda: codec)

    with pytest.raises(HTTPException) as exc_info:
        await dependency(make_request(None))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail["response"] == "Missing authorization"  # type: ignore


@pytest.mark.asyncio
async def test_invalid_token(codec: SessionTokenCodec) -> None:
    """Test that token with bad signature is rejected."""
    other = SessionTokenCodec("another-secret-that-is-long-enough-for-hs256")
    token = other.issue("u-1", "jo@example.com").token
    dependency = SessionTokenAuthDependency(lambda: codec)

    with pytest.raises(HTTPException) as exc_info:
        await dependency(make_request(f"Bearer {token}"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail["response"] == "Invalid token"  # type: ignore


@pytest.mark.asyncio
async def test_malformed_token(codec: SessionTokenCodec) -> None:
    """Test that garbage token is rejected."""
    dependency = SessionTokenAuthDependency(lambda: codec)

    with pytest.raises(HTTPException) as exc_info:
        await dependency(make_request("Bearer garbage"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail["response"] == "Invalid token"  # type: ignore


@pytest.mark.asyncio
async def test_expired_token() -> None:
    """Test that expired token is rejected with specific message."""
    issued_at = datetime(2024, 5, 20, 8, 0, 0, tzinfo=UTC)
    issuing = SessionTokenCodec(SECRET, clock=lambda: issued_at)
    verifying = SessionTokenCodec(
        SECRET, clock=lambda: issued_at + timedelta(seconds=3700)
    )
    token = issuing.issue("u-1", "jo@example.com").token
    dependency = SessionTokenAuthDependency(lambda: verifying)

    with pytest.raises(HTTPException) as exc_info:
        await dependency(make_request(f"Bearer {token}"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == {  # type: ignore
        "response": "Token has expired",
        "cause": "Token has expired",
    }
