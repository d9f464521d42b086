"""Definition of FastAPI based web service."""

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from llama_stack_client import APIConnectionError  # type: ignore
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Mount, Route, WebSocketRoute

import constants
import metrics
import version
from app import routers
from app.state import app_state
from client import AsyncLlamaStackClientHolder
from configuration import configuration
from kvstore.store_error import StoreError
from log import get_logger
from utils.llama_stack_version import (
    InvalidLlamaStackVersionException,
    check_llama_stack_version,
)

logger = get_logger(__name__)

logger.info("Initializing app")

# Uvicorn workers run in separate processes, so the configuration has to be
# loaded again from the path stored by the entry point
if not configuration.is_loaded():
    configuration.load_configuration(
        os.environ.get(
            constants.CONFIGURATION_PATH_ENV_VARIABLE,
            constants.DEFAULT_CONFIGURATION_FILE,
        )
    )

service_name = configuration.configuration.name


# running on FastAPI startup
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Initialize app resources.

    FastAPI lifespan context: connects the key-value store and the Llama
    Stack client before serving requests. Failures are recorded in the
    application state and reported by the readiness probe.
    """
    app_state.mark_check_complete("configuration_loaded", configuration.is_loaded())

    try:
        app_state.mark_check_complete(
            "storage_connected", configuration.kv_store.ready()
        )
    except StoreError as e:
        app_state.mark_check_complete("storage_connected", False, str(e))

    await AsyncLlamaStackClientHolder().load(configuration.llama_stack_configuration)
    try:
        # check if the Llama Stack version is supported by the service
        await check_llama_stack_version(AsyncLlamaStackClientHolder().get_client())
        app_state.mark_check_complete("llama_client_initialized", True)
    except (APIConnectionError, InvalidLlamaStackVersionException) as e:
        app_state.mark_check_complete("llama_client_initialized", False, str(e))

    get_logger("app.endpoints.handlers")
    app_state.mark_initialization_complete()
    logger.info("App startup complete")

    yield


app = FastAPI(
    title=f"{service_name} service - OpenAPI",
    summary=f"{service_name} service API specification.",
    description=f"{service_name} service API specification.",
    version=version.__version__,
    license_info={
        "name": "Apache 2.0",
        "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
    },
    servers=[
        {"url": "http://localhost:8080/", "description": "Locally running service"}
    ],
    lifespan=lifespan,
)

cors = configuration.service_configuration.cors

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.allow_origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


@app.middleware("http")
async def rest_api_metrics(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Middleware with REST API counter update logic."""
    path = request.url.path
    logger.debug("Received request for path: %s", path)

    # ignore paths that are not part of the app routes
    if path not in app_routes_paths:
        return await call_next(request)

    logger.debug("Processing API request for path: %s", path)

    # measure time to handle duration + update histogram
    with metrics.response_duration_seconds.labels(path).time():
        response = await call_next(request)

    # ignore /metrics endpoint that will be called periodically
    if not path.endswith("/metrics"):
        # just update metrics
        metrics.rest_api_calls_total.labels(path, response.status_code).inc()
    return response


def error_body(detail: Any) -> dict[str, Any]:
    """Convert detail of HTTP exception into JSON body with `error` field.

    Detail in `{"response": ..., "cause": ...}` form is flattened, the summary
    becomes the `error` field and all other fields are kept.
    """
    if isinstance(detail, dict) and "response" in detail:
        body = {"error": detail["response"]}
        body.update({k: v for k, v in detail.items() if k != "response"})
        return body
    return {"error": str(detail)}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTP exceptions as JSON with `error` field."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render invalid or missing request fields as 400 Bad Request."""
    errors = exc.errors()
    cause = "; ".join(
        f"{'.'.join(str(item) for item in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )
    logger.info("Invalid request to %s: %s", request.url.path, cause)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "cause": cause},
    )


@app.exception_handler(StoreError)
async def store_exception_handler(_request: Request, exc: StoreError) -> JSONResponse:
    """Render errors of key-value store as 500 Internal Server Error."""
    logger.error("Error communicating with key-value store: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "cause": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Render any other error as 500 Internal Server Error."""
    logger.exception("Unhandled error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


logger.info("Including routers")
routers.include_routers(app)

app_routes_paths = [
    route.path
    for route in app.routes
    if isinstance(route, (Mount, Route, WebSocketRoute))
]
