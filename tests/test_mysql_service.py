"""Tests for MySQLDatabaseService with PyMySQL's connect() replaced."""

import pymysql
import pytest

from svloader import ConnectionSettings, DatabaseConnectionError
from svloader.mysql_service import MySQLDatabaseService


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.description = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, args=None):
        self._conn.executed.append((sql, args))
        if sql.startswith("SELECT"):
            self.description = (("cnt",),)

    def fetchall(self):
        return ({"cnt": 3},)


class FakeConnection:
    def __init__(self, fail_close=False):
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False
        self.fail_close = fail_close

    def cursor(self, cursor_class=None):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        if self.fail_close:
            raise pymysql.err.Error("Already closed")
        self.closed = True


@pytest.fixture
def fake_connect(monkeypatch):
    calls = []
    conn = FakeConnection()

    def _connect(**kwargs):
        calls.append(kwargs)
        return conn

    monkeypatch.setattr(pymysql, "connect", _connect)
    return calls, conn


SETTINGS = ConnectionSettings("db.local", 3306, "sales", "loader")


class TestMySQLDatabaseService:
    def test_lazy_connect(self, fake_connect):
        calls, _ = fake_connect
        service = MySQLDatabaseService(SETTINGS)
        assert calls == []
        service.connect()
        assert service.connected
        assert calls == [
            {
                "host": "db.local",
                "port": 3306,
                "user": "loader",
                "database": "sales",
                "charset": "utf8mb4",
                "autocommit": False,
            }
        ]

    def test_connect_passes_password(self, fake_connect):
        calls, _ = fake_connect
        MySQLDatabaseService(ConnectionSettings("h", 1, "d", "u", "pw")).connect()
        assert calls[0]["password"] == "pw"

    def test_connect_failure(self, monkeypatch):
        def refuse(**kwargs):
            raise pymysql.err.OperationalError(2003, "Can't connect to MySQL server")

        monkeypatch.setattr(pymysql, "connect", refuse)
        service = MySQLDatabaseService(SETTINGS)
        with pytest.raises(DatabaseConnectionError, match="db.local:3306/sales") as exc_info:
            service.connect()
        assert isinstance(exc_info.value.__cause__, pymysql.err.OperationalError)
        assert not service.connected

    def test_literal_statement_sent_without_args(self, fake_connect):
        _, conn = fake_connect
        service = MySQLDatabaseService(SETTINGS)
        service.connect()
        with service.transaction():
            assert service.execute('INSERT INTO `t` VALUES ("100%");') == []
        assert conn.executed == [('INSERT INTO `t` VALUES ("100%");', None)]
        assert conn.commits == 1

    def test_select_returns_dicts(self, fake_connect):
        service = MySQLDatabaseService(SETTINGS)
        service.connect()
        with service.transaction():
            assert service.execute("SELECT COUNT(*) AS cnt FROM t") == [{"cnt": 3}]

    def test_rollback_on_error(self, fake_connect):
        _, conn = fake_connect
        service = MySQLDatabaseService(SETTINGS)
        service.connect()
        with pytest.raises(ValueError):
            with service.transaction():
                raise ValueError("boom")
        assert conn.rollbacks == 1
        assert conn.commits == 0

    def test_requires_transaction(self, fake_connect):
        service = MySQLDatabaseService(SETTINGS)
        service.connect()
        with pytest.raises(RuntimeError, match="No active transaction"):
            service.execute("SELECT 1")

    def test_execute_ddl_splits_statements(self, fake_connect):
        _, conn = fake_connect
        service = MySQLDatabaseService(SETTINGS)
        service.connect()
        service.execute_ddl("DROP TABLE IF EXISTS t; CREATE TABLE t (a INT);")
        assert [sql for sql, _ in conn.executed] == ["DROP TABLE IF EXISTS t", "CREATE TABLE t (a INT)"]
        assert conn.commits == 1

    def test_close_swallows_driver_errors(self, monkeypatch, caplog):
        monkeypatch.setattr(pymysql, "connect", lambda **kwargs: FakeConnection(fail_close=True))
        service = MySQLDatabaseService(SETTINGS)
        service.connect()
        service.close()
        service.close()
        assert not service.connected
        assert "Error while closing" in caplog.text
