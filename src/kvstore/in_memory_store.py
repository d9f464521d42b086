"""In-memory key-value store implementation."""

from typing import Optional

from kvstore.store import KeyValueStore
from log import get_logger

logger = get_logger("kvstore.in_memory_store")


class InMemoryStore(KeyValueStore):
    """In-memory key-value store.

    Content is lost when the process ends and it is not shared between Uvicorn
    workers, so it is suitable for development and testing only.
    """

    def __init__(self) -> None:
        """Create a new instance of in-memory store."""
        self._data: dict[str, str] = {}

    def connect(self) -> None:
        """Initialize connection to storage."""
        logger.info("Connecting to in-memory storage")

    def connected(self) -> bool:
        """Check if connection to storage is alive."""
        return True

    def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key."""
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        """Set the value associated with the given key."""
        self._data[key] = value

    def delete(self, key: str) -> bool:
        """Delete the value associated with the given key."""
        return self._data.pop(key, None) is not None

    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys starting with the given prefix."""
        return [key for key in self._data if key.startswith(prefix)]

    def ready(self) -> bool:
        """Check if the storage is ready.

        Returns:
            True in all cases.
        """
        return True
