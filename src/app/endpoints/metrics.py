"""Handler for REST API call to provide metrics."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    generate_latest,
)

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics_endpoint_handler() -> PlainTextResponse:
    """Handle request to the /metrics endpoint.

    Returns the latest Prometheus metrics in form of a plain text.
    """
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
