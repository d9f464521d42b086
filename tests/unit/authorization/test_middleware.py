"""Unit tests for authorization middleware."""

from typing import Any

import pytest
from fastapi import HTTPException

from authentication.interface import AuthTuple
from authorization.middleware import admin_only


@admin_only
async def admin_endpoint(auth: AuthTuple) -> dict[str, Any]:
    """Endpoint available to administrators only."""
    return {"subject_id": auth[0]}


@pytest.mark.asyncio
async def test_admin_is_allowed() -> None:
    """Test that user from admin allow-list can call the endpoint."""
    auth: AuthTuple = ("u-admin", "admin@example.com", "token")
    assert await admin_endpoint(auth=auth) == {"subject_id": "u-admin"}


@pytest.mark.asyncio
async def test_admin_email_case_insensitive() -> None:
    """Test that admin e-mail is compared case-insensitively."""
    auth: AuthTuple = ("u-admin", "Admin@Example.com", "token")
    assert await admin_endpoint(auth=auth) == {"subject_id": "u-admin"}


@pytest.mark.asyncio
async def test_non_admin_is_forbidden() -> None:
    """Test that other users are rejected with 403."""
    auth: AuthTuple = ("u-1", "jo@example.com", "token")

    with pytest.raises(HTTPException) as exc_info:
        await admin_endpoint(auth=auth)

    assert exc_info.value.status_code == 403
    assert exc_info.value.detail["response"] == "Forbidden"  # type: ignore


@pytest.mark.asyncio
async def test_endpoint_without_auth() -> None:
    """Test that decorated endpoint must accept auth argument."""

    @admin_only
    async def misconfigured_endpoint() -> None:
        """Endpoint that does not accept authentication."""

    with pytest.raises(HTTPException) as exc_info:
        await misconfigured_endpoint()

    assert exc_info.value.status_code == 500
