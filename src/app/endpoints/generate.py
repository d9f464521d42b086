"""Handler for REST API endpoint for quota-guarded text generation."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from authentication import get_auth_dependency
from authentication.interface import AuthTuple
from configuration import configuration
from models.requests import GenerateRequest
from models.responses import ErrorResponse, GenerateResponse
from quota.quota_exceed_error import QuotaExceedError
from services.accounting import get_accounting
from services.generation import UpstreamFailureError, get_generation_proxy
from utils.endpoints import touch_acting_user
from utils.quota import quota_exceeded_error

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["generate"])


generate_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Text generated",
        "model": GenerateResponse,
    },
    400: {
        "description": "Missing or invalid field in request",
        "model": ErrorResponse,
    },
    401: {
        "description": "Missing or invalid credentials provided by client",
        "model": ErrorResponse,
    },
    429: {
        "description": "Monthly or daily quota has been exceeded",
        "model": ErrorResponse,
    },
    500: {
        "description": "Generative backend failed",
        "model": ErrorResponse,
    },
}


@router.post("/generate", responses=generate_responses)
async def generate_endpoint_handler(
    body: GenerateRequest,
    auth: Annotated[AuthTuple, Depends(get_auth_dependency())],
) -> GenerateResponse:
    """Generate text for the authenticated user.

    Quota is checked before the generative backend is called. The request is
    counted only when the backend succeeded.
    """
    accounting = get_accounting()
    user = touch_acting_user(accounting.user_directory, auth)
    proxy = get_generation_proxy(
        accounting.quota_ledger, configuration.llama_stack_configuration
    )

    try:
        result = await proxy.generate(
            user.subject_id,
            body.prompt,
            max_tokens=body.max_tokens,
            temperature=body.temperature,
        )
    except QuotaExceedError as e:
        raise quota_exceeded_error(e) from e
    except UpstreamFailureError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"response": "Generation failed", "cause": str(e)},
        ) from e

    return GenerateResponse(result=result)
