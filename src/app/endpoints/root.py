"""Handler for the / endpoint."""

import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["root"])

index_page = """
<html>
    <head>
        <title>WordGarden usage service</title>
    </head>
    <body style='font-family: sans-serif;text-align:center;'>
        <h1>WordGarden usage service</h1>
        <div><a href="docs">Swagger UI</a></div>
        <div><a href="redoc">ReDoc</a></div>
    </body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def root_endpoint_handler() -> HTMLResponse:
    """Handle request to the / endpoint."""
    logger.info("Response to / endpoint")
    return HTMLResponse(index_page)
