"""Shared test fixtures."""

from contextlib import contextmanager

import pytest

from svloader import SVIngestor, create_service
from svloader.errors import DatabaseConnectionError
from svloader.service import DatabaseService


class RecordingService(DatabaseService):
    """In-memory DatabaseService that records every statement it executes.

    fail_on holds 1-based statement numbers whose execution raises.
    """

    placeholder = "%s"

    def __init__(self, fail_on=(), fail_connect=False):
        self.statements: list[tuple[str, object]] = []
        self.fail_on = set(fail_on)
        self.fail_connect = fail_connect
        self.connect_calls = 0
        self.close_calls = 0
        self.commits = 0
        self.rollbacks = 0
        self._open = False

    @property
    def connected(self) -> bool:
        return self._open

    @property
    def sql(self) -> list[str]:
        return [sql for sql, _ in self.statements]

    def connect(self) -> None:
        self.connect_calls += 1
        if self.fail_connect:
            raise DatabaseConnectionError("Connection refused")
        self._open = True

    def close(self) -> None:
        self.close_calls += 1
        self._open = False

    @contextmanager
    def transaction(self):
        try:
            yield
            self.commits += 1
        except Exception:
            self.rollbacks += 1
            raise

    def execute(self, sql, params=None):
        self.statements.append((sql, params))
        if len(self.statements) in self.fail_on:
            raise RuntimeError("Column count doesn't match value count at row 1")
        return []

    def execute_ddl(self, sql) -> None:
        pass


@pytest.fixture
def db_service(tmp_path):
    """Provide a fresh SQLite DatabaseService for each test."""
    db_path = tmp_path / "test.db"
    service = create_service(f"sqlite:///{db_path}")
    service.connect()
    yield service
    service.close()


@pytest.fixture
def recording_service():
    return RecordingService()


@pytest.fixture
def progress():
    """Collects progress messages instead of printing them."""
    return []


@pytest.fixture
def make_ingestor(progress):
    """Build an SVIngestor bound to the given fake service."""

    def _make(service):
        return SVIngestor(
            "mysql://loader@db.example/warehouse",
            service_factory=lambda target: service,
            on_progress=progress.append,
        )

    return _make


@pytest.fixture
def write_file(tmp_path):
    """Write raw text to a file under tmp_path and return its path."""

    def _write(text: str, name: str = "data.txt", encoding: str = "utf-8"):
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _write
