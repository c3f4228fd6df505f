"""MySQL implementation of DatabaseService."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import pymysql
import pymysql.cursors

from svloader.errors import DatabaseConnectionError
from svloader.service import DatabaseService
from svloader.settings import ConnectionSettings
from svloader.types import Params, Record

logger = logging.getLogger(__name__)


class MySQLDatabaseService(DatabaseService):
    """MySQL backend using PyMySQL.

    Holds exactly one connection, opened by connect(). Autocommit is off so
    every transaction() block is committed or rolled back as a unit.
    """

    placeholder = "%s"

    def __init__(self, settings: ConnectionSettings, charset: str = "utf8mb4"):
        self._settings = settings
        self._charset = charset
        self._conn: Any = None
        self._in_transaction = False

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        if self._conn is not None:
            return
        s = self._settings
        try:
            self._conn = pymysql.connect(
                **s.connect_kwargs(),
                charset=self._charset,
                autocommit=False,
            )
        except (pymysql.MySQLError, OSError) as e:
            raise DatabaseConnectionError(
                f"Cannot connect to mysql://{s.host}:{s.port}/{s.database} as {s.user}: {e}"
            ) from e
        logger.debug("Connected to %s:%d/%s", s.host, s.port, s.database)

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except (pymysql.MySQLError, OSError):
            logger.warning("Error while closing MySQL connection", exc_info=True)

    def _get_conn(self):
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
        with conn.cursor(pymysql.cursors.DictCursor) as cur:
            # PyMySQL only applies %-interpolation when args is not None.
            cur.execute(sql, params)
            if cur.description is None:
                return []
            return list(cur.fetchall())

    def execute_ddl(self, sql: str) -> None:
        if self._conn is None:
            raise RuntimeError("Not connected. Call connect() first.")
        conn = self._conn
        with conn.cursor() as cur:
            for statement in sql.split(";"):
                statement = statement.strip()
                if statement:
                    cur.execute(statement)
        conn.commit()
