"""Abstract class that is the parent for all key-value store implementations."""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """Abstract class that is the parent for all key-value store implementations.

    Keys and values are plain strings. Structured values are serialized to
    JSON by the callers.
    """

    @abstractmethod
    def connect(self) -> None:
        """Initialize connection to storage."""

    @abstractmethod
    def connected(self) -> bool:
        """Check if connection to storage is alive."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key.

        Args:
            key: Key to look up.

        Returns:
            The value associated with the key, or None if not found.
        """

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Set the value associated with the given key.

        Args:
            key: Key to store the value under.
            value: The value to store, existing value is overwritten.
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete the value associated with the given key.

        Args:
            key: Key to delete.

        Returns:
            bool: True if the key existed and was deleted, False otherwise.
        """

    @abstractmethod
    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys starting with the given prefix.

        Args:
            prefix: Key prefix, all keys are returned for empty prefix.

        Returns:
            Keys in storage iteration order, no ordering is guaranteed.
        """

    @abstractmethod
    def ready(self) -> bool:
        """Check if the storage is ready.

        Returns:
            True if the storage is ready, False otherwise.
        """
