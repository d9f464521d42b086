"""Quota handling helper functions."""

from fastapi import HTTPException, status

import metrics
from log import get_logger
from quota.quota_exceed_error import QuotaExceedError

logger = get_logger(__name__)


def quota_exceeded_error(quota_exceed_error: QuotaExceedError) -> HTTPException:
    """Construct 429 response for exceeded quota.

    Args:
        quota_exceed_error: Error raised by quota ledger.

    Returns:
        HTTPException whose detail contains the kind of exceeded quota.
    """
    kind = quota_exceed_error.kind.value
    logger.warning("The %s quota has been exceeded: %s", kind, quota_exceed_error)
    metrics.quota_denials_total.labels(kind).inc()
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail={
            "response": "quota exceeded",
            "cause": str(quota_exceed_error),
            "quota": kind,
        },
    )
