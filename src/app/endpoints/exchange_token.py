"""Handler for REST API endpoint exchanging identity token for session token."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status

from authentication import get_session_token_codec
from authentication.utils import extract_user_token
from identity import get_identity_verifier
from identity.interface import IdentityVerificationError
from models.requests import ExchangeTokenRequest
from models.responses import ErrorResponse, ExchangeTokenResponse
from services.accounting import get_accounting
from services.token_exchange import exchange_token

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["authentication"])


exchange_token_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Session token issued",
        "model": ExchangeTokenResponse,
    },
    400: {
        "description": "Missing or invalid field in request",
        "model": ErrorResponse,
    },
    401: {
        "description": "Identity token is missing or has not been accepted",
        "model": ErrorResponse,
    },
}


@router.post("/exchange-token", responses=exchange_token_responses)
async def exchange_token_endpoint_handler(
    request: Request,
    body: ExchangeTokenRequest,
) -> ExchangeTokenResponse:
    """Exchange identity token for session token.

    Identity token issued by identity provider is expected in Authorization
    header. The token is verified, the user is recorded in user directory
    and new session token is issued.
    """
    assertion = extract_user_token(request.headers)

    try:
        issued = await exchange_token(
            get_identity_verifier(),
            get_session_token_codec(),
            get_accounting().user_directory,
            assertion,
            body.subject_id,
            body.email,
            body.name,
        )
    except IdentityVerificationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"response": "Invalid identity token", "cause": str(e)},
        ) from e

    return ExchangeTokenResponse(
        session_token=issued.token, expires_in=issued.expires_in
    )
