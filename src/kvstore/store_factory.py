"""Key-value store factory class."""

import constants
from models.config import StorageConfiguration
from kvstore.store import KeyValueStore
from kvstore.in_memory_store import InMemoryStore
from kvstore.postgres_store import PostgresStore
from kvstore.sqlite_store import SQLiteStore
from log import get_logger

logger = get_logger("kvstore.store_factory")


# pylint: disable=R0903
class StoreFactory:
    """Key-value store factory class."""

    @staticmethod
    def key_value_store(config: StorageConfiguration) -> KeyValueStore:
        """Create an instance of KeyValueStore based on loaded configuration.

        Returns:
            An instance of `KeyValueStore` (either `SQLiteStore`, `PostgresStore`
            or `InMemoryStore`).
        """
        logger.info("Creating key-value store instance of type %s", config.type)
        match config.type:
            case constants.STORE_TYPE_MEMORY:
                return InMemoryStore()
            case constants.STORE_TYPE_SQLITE:
                if config.sqlite is not None:
                    return SQLiteStore(config.sqlite)
                raise ValueError("Expecting configuration for SQLite storage")
            case constants.STORE_TYPE_POSTGRES:
                if config.postgres is not None:
                    return PostgresStore(config.postgres)
                raise ValueError("Expecting configuration for PostgreSQL storage")
            case None:
                raise ValueError("Storage type must be set")
            case _:
                raise ValueError(
                    f"Invalid storage type: {config.type}. "
                    f"Use '{constants.STORE_TYPE_POSTGRES}' '{constants.STORE_TYPE_SQLITE}' "
                    f"or '{constants.STORE_TYPE_MEMORY}' options."
                )
