"""Unit tests for routers.py."""

from typing import Any, Optional

from fastapi import FastAPI

from app.endpoints import (
    dashboard,
    exchange_token,
    generate,
    global_limits,
    health,
    metrics,
    root,
    user_quota,
    users,
)
from app.routers import include_routers


class MockFastAPI(FastAPI):
    """Mock class for FastAPI."""

    def __init__(self) -> None:  # pylint: disable=super-init-not-called
        """Initialize mock class."""
        self.routers: list[tuple[Any, Optional[str]]] = []

    def include_router(  # pylint: disable=too-many-arguments,arguments-differ
        self,
        router: Any,
        *,
        prefix: str = "",
        **_kwargs: Any,
    ) -> None:
        """Register new router."""
        self.routers.append((router, prefix))

    def get_router_prefix(self, router: Any) -> Optional[str]:
        """Retrieve router prefix configured for mocked REST API."""
        return next((prefix for r, prefix in self.routers if r == router), None)


def test_include_routers() -> None:
    """Test the function include_routers."""
    app = MockFastAPI()
    include_routers(app)

    assert len(app.routers) == 9
    assert app.get_router_prefix(root.router) == ""
    assert app.get_router_prefix(exchange_token.router) == "/api"
    assert app.get_router_prefix(user_quota.router) == "/api"
    assert app.get_router_prefix(dashboard.router) == "/api"
    assert app.get_router_prefix(users.router) == "/api"
    assert app.get_router_prefix(global_limits.router) == "/api"
    assert app.get_router_prefix(generate.router) == "/v1"
    assert app.get_router_prefix(health.router) == ""
    assert app.get_router_prefix(metrics.router) == ""
