"""Models for REST API responses.

All responses use camelCase field names in JSON.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

import constants
from models.usage import DailyStat, ResolvedLimits, SystemLimits, UserRecord


class ApiModel(BaseModel):
    """Base class for response models serialized with camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExchangeTokenResponse(ApiModel):
    """Model representing a response to token exchange request.

    Attributes:
        session_token: The session token to be used as bearer token.
        expires_in: Token lifetime in seconds.
    """

    session_token: str = Field(
        description="Session token to be used in Authorization header",
        examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.e30.c2lnbmF0dXJl"],
    )
    expires_in: int = Field(
        description="Token lifetime in seconds",
        examples=[constants.DEFAULT_SESSION_TOKEN_TTL],
    )


class GenerateResponse(ApiModel):
    """Model representing a response to generation request."""

    result: str = Field(
        description="Generated text",
        examples=["Red globes ripening / the vine bows under summer / sweet weight"],
    )


class UserQuotaResponse(ApiModel):
    """Model representing current usage and limits of the calling user.

    Attributes:
        usage: Requests made in current month.
        limit: Effective monthly limit.
        daily_usage: Requests made today.
        daily_limit: Effective daily limit.
        month: Current month period.
        day: Current day period.
    """

    usage: int = Field(description="Requests made in current month", examples=[12])
    limit: int = Field(description="Effective monthly limit", examples=[50])
    daily_usage: int = Field(description="Requests made today", examples=[3])
    daily_limit: int = Field(description="Effective daily limit", examples=[10])
    month: str = Field(description="Current month", examples=["2024-05"])
    day: str = Field(description="Current day", examples=["2024-05-20"])


class LimitsModel(ApiModel):
    """Pair of monthly and daily limits."""

    monthly: int = Field(description="Monthly limit", examples=[50])
    daily: int = Field(description="Daily limit", examples=[10])

    @classmethod
    def from_limits(cls, limits: SystemLimits | ResolvedLimits) -> "LimitsModel":
        """Construct the model from system or resolved limits."""
        return cls(monthly=limits.monthly_limit, daily=limits.daily_limit)


class UserModel(ApiModel):
    """One row of user listing.

    Usage counters are rolled over to current periods.
    """

    id: str = Field(description="Subject ID", examples=["manual-1f0c..."])
    email: str = Field(examples=["jo@example.com"])
    name: Optional[str] = Field(None, examples=["Jo Gardener"])
    monthly_usage: int = Field(0, examples=[12])
    daily_usage: int = Field(0, examples=[3])
    monthly_limit: int = Field(examples=[50])
    daily_limit: int = Field(examples=[10])
    last_active: str = Field(
        description="ISO 8601 timestamp of last activity or 'Never'",
        examples=["2024-05-20T08:15:00+00:00", constants.NEVER_ACTIVE],
    )
    manually_added: bool = Field(False, examples=[False])

    @classmethod
    def from_record(
        cls,
        record: UserRecord,
        limits: ResolvedLimits,
        monthly_usage: int = 0,
        daily_usage: int = 0,
    ) -> "UserModel":
        """Construct the row from user record, limits and usage."""
        return cls(
            id=record.subject_id,
            email=record.email,
            name=record.display_name,
            monthly_usage=monthly_usage,
            daily_usage=daily_usage,
            monthly_limit=limits.monthly_limit,
            daily_limit=limits.daily_limit,
            last_active=record.last_active,
            manually_added=record.manually_added,
        )


class DashboardResponse(ApiModel):
    """Model representing admin dashboard snapshot.

    Attributes:
        users: All known users with their usage and limits.
        system_limits: System-wide limits.
        daily_stats: Number of generations per day, oldest first.
        total_users: Number of known users.
        active_today: Number of users active today.
        total_requests: Sum of monthly usage of all users.
    """

    users: list[UserModel]
    system_limits: LimitsModel
    daily_stats: list[DailyStat]
    total_users: int = Field(examples=[150])
    active_today: int = Field(examples=[12])
    total_requests: int = Field(examples=[3421])


class UserAddResponse(ApiModel):
    """Model representing a response to user add request."""

    user: UserModel


class SuccessResponse(ApiModel):
    """Model representing successful operation without any other result."""

    success: bool = Field(True, examples=[True])


class UserLimitResponse(ApiModel):
    """Model representing effective limits of one user after change."""

    email: str = Field(examples=["jo@example.com"])
    limits: LimitsModel


class GlobalLimitsResponse(ApiModel):
    """Model representing system-wide limits after change."""

    limits: LimitsModel


class ReadinessResponse(BaseModel):
    """Model representing response to a readiness request.

    Attributes:
        ready: If service is ready.
        reason: The reason for the readiness.

    Example:
        ```python
        readiness_response = ReadinessResponse(
            ready=False,
            reason="Key-value store is not reachable",
        )
        ```
    """

    ready: bool = Field(
        ...,
        description="Flag indicating if service is ready",
        examples=[True, False],
    )

    reason: str = Field(
        ...,
        description="The reason for the readiness",
        examples=["Service is ready"],
    )


class LivenessResponse(BaseModel):
    """Model representing a response to a liveness request.

    Attributes:
        alive: If app is alive.
    """

    alive: bool = Field(
        ...,
        description="Flag indicating that the app is alive",
        examples=[True, False],
    )


class ErrorResponse(BaseModel):
    """Model representing body of all error responses.

    Attributes:
        error: Short summary of the error.
        cause: Optional detailed explanation of what caused the error.
        quota: Which quota has been exceeded, set for 429 responses only.
    """

    error: str = Field(
        description="Short summary of the error",
        examples=["Invalid token", "quota exceeded", "Internal server error"],
    )
    cause: Optional[str] = Field(
        None,
        description="Detailed explanation of what caused the error",
        examples=["Token has expired"],
    )
    quota: Optional[str] = Field(
        None,
        description="Exceeded quota, either 'monthly' or 'daily'",
        examples=["monthly", "daily"],
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "Invalid token", "cause": "Invalid token: bad signature"},
                {
                    "error": "quota exceeded",
                    "cause": "User u-1 has exceeded monthly quota: 50 of 50 requests used",
                    "quota": "monthly",
                },
            ]
        }
    }
