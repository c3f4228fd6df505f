"""Abstract DatabaseService interface."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from svloader.types import Params, Record


class DatabaseService(ABC):
    """Single-connection interface used by the ingest pipeline.

    Design principles:
    - Lazy: constructing a service never touches the network; connect() does
    - One connection per service, owned by one ingest
    - Each transaction() commits on its own, so batches are independent
    """

    #: Bind marker understood by the driver (``%s`` or ``?``).
    placeholder: str = "%s"

    @abstractmethod
    def connect(self) -> None:
        """Open the connection. Raises DatabaseConnectionError on failure."""

    @abstractmethod
    def close(self) -> None:
        """Close the connection. Safe to call more than once; never raises."""

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether the connection is currently open."""

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Context manager: commits on success, rolls back on error."""

    @abstractmethod
    def execute(self, sql: str, params: Params | None = None) -> list[Record]:
        """Execute a single SQL statement and return rows as dicts.

        With ``params=None`` the statement text is sent as is, without
        placeholder interpolation.
        """

    @abstractmethod
    def execute_ddl(self, sql: str) -> None:
        """Execute DDL statements (CREATE TABLE, DROP TABLE, etc.)."""

    def __enter__(self) -> "DatabaseService":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
