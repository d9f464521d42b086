"""REST API routers."""

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


def include_routers(app: FastAPI) -> None:
    """Include FastAPI routers for different endpoints.

    Args:
        app: The `FastAPI` app instance.
    """
    app.include_router(root.router)

    app.include_router(exchange_token.router, prefix="/api")
    app.include_router(user_quota.router, prefix="/api")
    app.include_router(dashboard.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(global_limits.router, prefix="/api")

    app.include_router(generate.router, prefix="/v1")

    # operational endpoints are not versioned
    app.include_router(health.router)
    app.include_router(metrics.router)
