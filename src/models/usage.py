"""Models of records persisted in key-value store."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

import constants


class StoredModel(BaseModel):
    """Base class for all records stored as JSON in key-value store."""

    model_config = ConfigDict(extra="ignore")


class UserRecord(StoredModel):
    """Record of known user.

    Attributes:
        subject_id: Unique ID of the user given by identity provider, or
            synthesized one for users added by admin.
        email: User e-mail address.
        display_name: Optional user name.
        last_active: ISO 8601 timestamp of last authenticated activity, or
            "Never" for users added by admin that did not log in yet.
        manually_added: True if the user was created by admin.
    """

    subject_id: str
    email: str
    display_name: Optional[str] = None
    last_active: str = constants.NEVER_ACTIVE
    manually_added: bool = False


class QuotaRecord(StoredModel):
    """Monthly and daily usage counters of one user.

    Counters are valid only for the stored periods. A counter whose period is
    not the current one needs to be treated as zero, see
    `quota.periods.rolled_over`.
    """

    monthly_count: NonNegativeInt = 0
    monthly_period: str = ""
    daily_count: NonNegativeInt = 0
    daily_period: str = ""


class LimitOverride(StoredModel):
    """Per-user exception from system-wide limits.

    A field set to None means that the system default is used for it.
    """

    monthly_limit: Optional[NonNegativeInt] = None
    daily_limit: Optional[NonNegativeInt] = None

    def is_empty(self) -> bool:
        """Check if the override does not override anything."""
        return self.monthly_limit is None and self.daily_limit is None


class SystemLimits(StoredModel):
    """System-wide usage limits."""

    monthly_limit: NonNegativeInt = constants.DEFAULT_MONTHLY_LIMIT
    daily_limit: NonNegativeInt = constants.DEFAULT_DAILY_LIMIT


class ResolvedLimits(BaseModel):
    """Effective limits of one user."""

    monthly_limit: int
    daily_limit: int


class QuotaCheckResult(str, Enum):
    """Result of quota check made before the generation."""

    ALLOWED = "allowed"
    MONTHLY_EXCEEDED = "monthly"
    DAILY_EXCEEDED = "daily"


class UserUsage(BaseModel):
    """Current usage of one user together with their effective limits."""

    record: QuotaRecord
    limits: ResolvedLimits


class DailyStat(BaseModel):
    """Number of successful generations made on given date."""

    date: str = Field(examples=["2024-05-20"])
    count: NonNegativeInt = 0
