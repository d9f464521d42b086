"""Key-value store that uses PostgreSQL to store values."""

from typing import Optional

import psycopg2

from kvstore.store import KeyValueStore
from kvstore.store_error import StoreError
from log import get_logger
from models.config import PostgreSQLDatabaseConfiguration
from utils.connection_decorator import connection

logger = get_logger("kvstore.postgres_store")


class PostgresStore(KeyValueStore):
    """Key-value store that uses PostgreSQL to store values.

    All values are stored in following table:

    ```
         Column      |            Type             | Nullable |
    -----------------+-----------------------------+----------+
     key             | text                        | not null |
     value           | text                        | not null |
     updated_at      | timestamp with time zone    | not null |
    Indexes:
        "kv_store_pkey" PRIMARY KEY, btree (key)
    ```
    """

    CREATE_STORE_TABLE = """
        CREATE TABLE IF NOT EXISTS kv_store (
            key        text NOT NULL,
            value      text NOT NULL,
            updated_at timestamp with time zone NOT NULL DEFAULT NOW(),
            PRIMARY KEY(key)
        );
        """

    SELECT_VALUE_STATEMENT = """
        SELECT value
          FROM kv_store
         WHERE key=%s
        """

    UPSERT_VALUE_STATEMENT = """
        INSERT INTO kv_store(key, value, updated_at)
        VALUES (%s, %s, NOW())
        ON CONFLICT (key)
        DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
        """

    DELETE_VALUE_STATEMENT = """
        DELETE FROM kv_store
         WHERE key=%s
        """

    LIST_KEYS_STATEMENT = """
        SELECT key
          FROM kv_store
         WHERE substr(key, 1, length(%s)) = %s
        """

    def __init__(self, config: PostgreSQLDatabaseConfiguration) -> None:
        """Create a new instance of PostgreSQL store."""
        self.postgres_config = config

        # initialize connection to DB
        self.connect()

    # pylint: disable=W0201
    def connect(self) -> None:
        """Initialize connection to database."""
        logger.info("Connecting to storage")
        # make sure the connection will have known state
        # even if PostgreSQL is not alive
        self.connection = None
        config = self.postgres_config
        namespace = config.namespace
        try:
            self.connection = psycopg2.connect(
                host=config.host,
                port=config.port,
                user=config.user,
                password=config.password.get_secret_value(),
                dbname=config.db,
                sslmode=config.ssl_mode,
                sslrootcert=config.ca_cert_path,
                gssencmode=config.gss_encmode,
                options=(
                    f"-csearch_path={namespace}"
                    if namespace is not None and namespace != "public"
                    else None
                ),
            )
            self.initialize_store()
        except Exception as e:
            if self.connection is not None:
                self.connection.close()
            logger.exception("Error initializing Postgres store:\n%s", e)
            raise
        self.connection.autocommit = True

    def connected(self) -> bool:
        """Check if connection to storage is alive."""
        if self.connection is None:
            logger.warning("Not connected, need to reconnect later")
            return False
        try:
            with self.connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            return True
        except (psycopg2.OperationalError, psycopg2.InterfaceError) as e:
            logger.error("Disconnected from storage: %s", e)
            return False

    def initialize_store(self) -> None:
        """Initialize schema and table used by key-value store."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("initialize_store: storage is disconnected")

        namespace = self.postgres_config.namespace

        # cursor as context manager is not used there on purpose
        # any CREATE statement can raise it's own exception
        # and it should not interfere with other statements
        cursor = self.connection.cursor()

        if namespace is not None and namespace != "public":
            logger.info("Initializing schema %s", namespace)
            cursor.execute(f'CREATE SCHEMA IF NOT EXISTS "{namespace}"')

        logger.info("Initializing table for key-value store")
        cursor.execute(PostgresStore.CREATE_STORE_TABLE)

        cursor.close()
        self.connection.commit()

    @connection
    def get(self, key: str) -> Optional[str]:
        """Get the value associated with the given key."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("get: storage is disconnected")

        with self.connection.cursor() as cursor:
            cursor.execute(self.SELECT_VALUE_STATEMENT, (key,))
            row = cursor.fetchone()

        if row is None:
            return None
        return row[0]

    @connection
    def put(self, key: str, value: str) -> None:
        """Set the value associated with the given key."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("put: storage is disconnected")

        with self.connection.cursor() as cursor:
            cursor.execute(self.UPSERT_VALUE_STATEMENT, (key, value))

    @connection
    def delete(self, key: str) -> bool:
        """Delete the value associated with the given key."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("delete: storage is disconnected")

        with self.connection.cursor() as cursor:
            cursor.execute(self.DELETE_VALUE_STATEMENT, (key,))
            deleted = cursor.rowcount > 0
        return deleted

    @connection
    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys starting with the given prefix."""
        if self.connection is None:
            logger.error("Storage is disconnected")
            raise StoreError("list_keys: storage is disconnected")

        with self.connection.cursor() as cursor:
            cursor.execute(self.LIST_KEYS_STATEMENT, (prefix, prefix))
            rows = cursor.fetchall()

        return [row[0] for row in rows]

    def ready(self) -> bool:
        """Check if the storage is ready."""
        return self.connected()
