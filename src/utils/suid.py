"""Generator of unique identifiers."""

import uuid


def get_suid() -> str:
    """Generate a unique ID using UUID4.

    Used as subject ID of users added by admin before their first login.

    Returns:
        str: A canonical UUID4 string.
    """
    return str(uuid.uuid4())
