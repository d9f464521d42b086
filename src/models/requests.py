"""Models for REST API requests."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, NonNegativeInt, field_validator

from models.usage import LimitOverride


def check_email_address(value: str) -> str:
    """Check that e-mail address looks like one and strip whitespaces."""
    value = value.strip()
    local_part, at, domain = value.partition("@")
    if not (local_part and at and domain):
        raise ValueError(f"Improper e-mail address '{value}'")
    return value


class ExchangeTokenRequest(BaseModel):
    """Model representing a request to exchange identity token for session token.

    The identity token itself is sent in Authorization header.

    Attributes:
        subject_id: Subject ID assigned to the user by identity provider.
        email: User e-mail address.
        name: The optional display name.

    Example:
        ```python
        request = ExchangeTokenRequest(subject_id="u-123", email="jo@example.com")
        ```
    """

    subject_id: str = Field(
        min_length=1,
        description="Subject ID assigned by identity provider",
        examples=["Qk3ZqZQy0bXv1LzR9hUzG8Y5tM12"],
        validation_alias=AliasChoices("subjectId", "firebaseUid", "subject_id"),
    )

    email: str = Field(
        description="User e-mail address",
        examples=["jo@example.com"],
    )

    name: Optional[str] = Field(
        None,
        description="The optional user name",
        examples=["Jo Gardener"],
    )

    # provides examples for /docs endpoint
    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "subjectId": "Qk3ZqZQy0bXv1LzR9hUzG8Y5tM12",
                    "email": "jo@example.com",
                    "name": "Jo Gardener",
                }
            ]
        },
    }

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        """Check if e-mail address has the proper format."""
        return check_email_address(value)


class GenerateRequest(BaseModel):
    """Model representing a request for text generation.

    Attributes:
        prompt: The prompt to be completed.
        max_tokens: The optional maximum number of generated tokens.
        temperature: The optional sampling temperature.
    """

    prompt: str = Field(
        min_length=1,
        description="The prompt to be completed",
        examples=["Write a haiku about tomatoes"],
    )

    max_tokens: Optional[int] = Field(
        None,
        gt=0,
        description="The optional maximum number of generated tokens",
        examples=[512],
        validation_alias=AliasChoices("maxTokens", "max_tokens"),
    )

    temperature: Optional[float] = Field(
        None,
        ge=0.0,
        le=2.0,
        description="The optional sampling temperature",
        examples=[0.7],
    )

    # provides examples for /docs endpoint
    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "prompt": "Write a haiku about tomatoes",
                    "maxTokens": 128,
                    "temperature": 0.7,
                }
            ]
        },
    }


class UserAddRequest(BaseModel):
    """Model representing a request to add user manually.

    Attributes:
        email: User e-mail address.
        name: The optional display name.
        monthly: The optional monthly limit override.
        daily: The optional daily limit override.
    """

    email: str = Field(description="User e-mail address", examples=["jo@example.com"])
    name: Optional[str] = Field(None, description="The optional user name")
    monthly: Optional[NonNegativeInt] = Field(
        None, description="Monthly limit override", examples=[100]
    )
    daily: Optional[NonNegativeInt] = Field(
        None, description="Daily limit override", examples=[20]
    )

    model_config = {"extra": "forbid"}

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        """Check if e-mail address has the proper format."""
        return check_email_address(value)


class UserDeleteRequest(BaseModel):
    """Model representing a request to delete user."""

    email: str = Field(description="User e-mail address", examples=["jo@example.com"])

    model_config = {"extra": "forbid"}

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        """Check if e-mail address has the proper format."""
        return check_email_address(value)


class UserLimitRequest(BaseModel):
    """Model representing a request to change limits of one user.

    Only limits present in the request are changed. A limit explicitly set to
    null is removed from the override, so the system limit applies again.

    Example:
        ```python
        # change daily limit only
        request = UserLimitRequest(email="jo@example.com", daily=5)
        ```
    """

    email: str = Field(description="User e-mail address", examples=["jo@example.com"])
    monthly: Optional[NonNegativeInt] = Field(
        None, description="Monthly limit override", examples=[100]
    )
    daily: Optional[NonNegativeInt] = Field(
        None, description="Daily limit override", examples=[5]
    )

    model_config = {"extra": "forbid"}

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        """Check if e-mail address has the proper format."""
        return check_email_address(value)

    def to_override(self) -> LimitOverride:
        """Convert limits present in the request to override changes."""
        changes = {}
        if "monthly" in self.model_fields_set:
            changes["monthly_limit"] = self.monthly
        if "daily" in self.model_fields_set:
            changes["daily_limit"] = self.daily
        return LimitOverride(**changes)


class GlobalLimitsRequest(BaseModel):
    """Model representing a request to change system-wide limits."""

    monthly: NonNegativeInt = Field(description="Monthly limit", examples=[50])
    daily: NonNegativeInt = Field(description="Daily limit", examples=[10])

    model_config = {"extra": "forbid"}
