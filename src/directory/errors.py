"""Exceptions raised by user directory."""


class DuplicateEmailError(Exception):
    """User with the same e-mail address already exists."""

    def __init__(self, email: str) -> None:
        """Construct exception object."""
        super().__init__(f"User with e-mail {email} already exists")
        self.email = email


class UserNotFoundError(Exception):
    """User with given e-mail address or ID does not exist."""

    def __init__(self, identifier: str) -> None:
        """Construct exception object."""
        super().__init__(f"User {identifier} not found")
        self.identifier = identifier
