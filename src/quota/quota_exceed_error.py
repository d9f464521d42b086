"""Any exception that can occur when user does not have enough quota available."""

from models.usage import QuotaCheckResult


class QuotaExceedError(Exception):
    """Exception notifying that usage quota has been exceeded."""

    def __init__(
        self, subject_id: str, kind: QuotaCheckResult, used: int, limit: int
    ) -> None:
        """Construct exception object."""
        message = (
            f"User {subject_id} has exceeded {kind.value} quota: {used} of {limit} "
            "requests used"
        )

        # call the base class constructor with the parameters it needs
        super().__init__(message)

        self.subject_id = subject_id
        self.kind = kind
        self.used = used
        self.limit = limit
