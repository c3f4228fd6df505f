"""SQLite implementation of DatabaseService."""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from svloader.errors import DatabaseConnectionError
from svloader.service import DatabaseService
from svloader.types import Params, Record

logger = logging.getLogger(__name__)


class SQLiteDatabaseService(DatabaseService):
    """SQLite backend using stdlib sqlite3.

    SQLite accepts backtick-quoted identifiers, so the multi-row INSERT built
    for MySQL runs unchanged. Useful for local runs and tests.
    """

    placeholder = "?"

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._in_transaction = False

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            conn = sqlite3.connect(self._db_path)
            conn.execute("PRAGMA foreign_keys=ON")
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"Cannot open SQLite database {self._db_path}: {e}") from e
        self._conn = conn

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except sqlite3.Error:
            logger.warning("Error while closing SQLite connection", exc_info=True)

    def _get_conn(self) -> sqlite3.Connection:
        """Get the connection for the current transaction."""
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        if not self._in_transaction:
            raise RuntimeError(
                "No active transaction. Wrap calls in a `with service.transaction():` block."
            )
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        conn = self._conn
        self._in_transaction = True
        try:
            yield
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self._in_transaction = False

    def execute(self, sql: str, params: Params | None = None) -> list[Record]:
        conn = self._get_conn()
        cursor = conn.execute(sql) if params is None else conn.execute(sql, params)
        if cursor.description is None:
            return []
        columns = [desc[0] for desc in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def execute_ddl(self, sql: str) -> None:
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        self._conn.executescript(sql)
        self._conn.commit()
