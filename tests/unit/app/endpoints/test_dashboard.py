"""Unit tests for the /dashboard REST API endpoint."""

import pytest
from fastapi import HTTPException

from app.endpoints.dashboard import dashboard_endpoint_handler
from authentication.interface import AuthTuple
from services.accounting import get_accounting

ADMIN: AuthTuple = ("u-admin", "admin@example.com", "token")


@pytest.mark.asyncio
async def test_dashboard() -> None:
    """Test dashboard requested by administrator."""
    accounting = get_accounting()
    accounting.user_directory.touch("u-1", "jo@example.com")
    accounting.quota_ledger.commit("u-1")

    response = await dashboard_endpoint_handler(auth=ADMIN)

    # administrator is recorded as active user too
    assert response.total_users == 2
    assert response.active_today == 2
    assert response.total_requests == 1
    assert len(response.daily_stats) == 30
    assert response.daily_stats[-1].count == 1


@pytest.mark.asyncio
async def test_dashboard_forbidden() -> None:
    """Test that regular user can not see the dashboard."""
    with pytest.raises(HTTPException) as exc_info:
        await dashboard_endpoint_handler(auth=("u-1", "jo@example.com", "token"))
    assert exc_info.value.status_code == 403
