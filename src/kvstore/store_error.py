"""Any exception that can occur when accessing key-value storage."""


class StoreError(Exception):
    """Error raised when key-value storage is not accessible."""
