"""Key-value store that uses SQLite to store values."""

from typing import Optional

import sqlite3

from kvstore.store import KeyValueStore
from kvstore.store_error import StoreError
from log import get_logger
from models.config import SQLiteDatabaseConfiguration
from utils.connection_decorator import connection

logger = get_logger("kvstore.sqlite_store")


class SQLiteStore(KeyValueStore):
    """Key-value store that uses SQLite to store values.

    All values are stored in following table:

    ```
         Column      |            Type             | Nullable |
    -----------------+-----------------------------+----------+
     key             | text                        | not null |
     value           | text                        | not null |
    Indexes:
        "kv_store_pkey" PRIMARY KEY, btree (key)
    ```
    """

    CREATE_STORE_TABLE = """
        CREATE TABLE IF NOT EXISTS kv_store (
            key   text NOT NULL,
            value text NOT NULL,
            PRIMARY KEY(key)
        );
        """

    SELECT_VALUE_STATEMENT = """
        SELECT value
          FROM kv_store
         WHERE key=?
        """

    UPSERT_VALUE_STATEMENT = """
        INSERT INTO kv_store(key, value)
        VALUES (?, ?)
        ON CONFLICT (key)
        DO UPDATE SET value = excluded.value
        """

    DELETE_VALUE_STATEMENT = """
        DELETE FROM kv_store
         WHERE key=?
        """

    # substr is used instead of LIKE so '%' and '_' in prefix don't need escaping
    LIST_KEYS_STATEMENT = """
        SELECT key
          FROM kv_store
         WHERE substr(key, 1, length(?)) = ?
        """

    def __init__(self, config: SQLiteDatabaseConfiguration) -> None:
        """Create a new instance of SQLite store."""
        self.sqlite_config = config

        # initialize connection to DB
        self.connect()

    # pylint: disable=W0201
    def connect(self) -> None:
        """Initialize connection to database."""
        logger.info("Connecting to storage")
        # make sure the connection will have known state
        # even if SQLite is not alive
        self.connection = None
        config = self.sqlite_config
        try:
            # requests can be handled in thread pool
            self.connection = sqlite3.connect(
                database=config.db_path, check_same_thread=False
            )
            self.initialize_store()
        except sqlite3.Error as e:
            if self.connection is not None:
                self.connection.close()
            logger.exception("Error initializing SQLite store:\n%s", e)
            raise
        self.connection.autocommit = True

    def connected(self) -> bool:
        """Check if connection to storage is alive."""
        if self.connection is None:
            logger.warning("Not connected, need to reconnect later")
            return False
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            logger.error("Disconnected from storage: %s", e)
            return False
        finally:
            if cursor is not None:
                try:
                    cursor.close()
                except Exception:  # pylint: disable=broad-exception-caught
                    logger.warning("Unable to close cursor")

    def initialize_store(self) -> None:
        """Initialize table used by key-value store."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("initialize_store: storage is disconnected")

        cursor = self.connection.cursor()

        logger.info("Initializing table for key-value store")
        cursor.execute(SQLiteStore.CREATE_STORE_TABLE)

        cursor.close()
        self.connection.commit()

    @connection
    def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("get: storage is disconnected")

        cursor = self.connection.cursor()
        cursor.execute(self.SELECT_VALUE_STATEMENT, (key,))
        row = cursor.fetchone()
        cursor.close()

        if row is None:
            return None
        return row[0]

    @connection
    def put(self, key: str, value: str) -> None:
        """Set the value associated with the given key."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("put: storage is disconnected")

        cursor = self.connection.cursor()
        cursor.execute(self.UPSERT_VALUE_STATEMENT, (key, value))
        cursor.close()
        self.connection.commit()

    @connection
    def delete(self, key: str) -> bool:
        """Delete the value associated with the given key."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("delete: storage is disconnected")

        cursor = self.connection.cursor()
        cursor.execute(self.DELETE_VALUE_STATEMENT, (key,))
        deleted = cursor.rowcount > 0
        cursor.close()
        self.connection.commit()
        return deleted

    @connection
    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys starting with the given prefix."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("list_keys: storage is disconnected")

        cursor = self.connection.cursor()
        cursor.execute(self.LIST_KEYS_STATEMENT, (prefix, prefix))
        rows = cursor.fetchall()
        cursor.close()

        return [row[0] for row in rows]

    def ready(self) -> bool:
        """Check if the storage is ready."""
        return self.connected()
