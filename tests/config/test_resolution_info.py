import pytest

from portsql.config import DialectConfig
from portsql.errors import DialectConfigurationError
from portsql.resolution import DialectResolutionInfo, introspect


class FakeCursor:
    def __init__(self, results):
        self._results = results
        self._current = None
        self.executed = []
        self.closed = False

    def execute(self, sql):
        self.executed.append(sql)
        self._current = self._results[len(self.executed) - 1]

    def fetchone(self):
        return self._current[0] if self._current else None

    def fetchall(self):
        return self._current

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, results):
        self.cursor_instance = FakeCursor(results)

    def cursor(self):
        return self.cursor_instance


def test_postgres_keywords_and_version():
    connection = FakeConnection([[("16.2",)], [("ANALYSE",), ("tablesample",)]])
    info = DialectResolutionInfo.from_connection(connection, "postgres")
    assert info.database_name == "postgresql"
    assert info.version_tuple == (16, 2)
    assert info.keywords == ("analyse", "tablesample")
    assert info.in_list_ceiling is None
    assert connection.cursor_instance.closed
    assert connection.cursor_instance.executed[0] == "show server_version"


def test_mysql_version_suffix():
    connection = FakeConnection([[("8.0.36-log",)], []])
    info = DialectResolutionInfo.from_connection(connection, "mysql")
    assert info.version_tuple == (8, 0, 36)
    assert info.keywords == ()


@pytest.mark.parametrize("version, ceiling", [("3.31.1", 999), ("3.32.0", 32766), ("3.45.1", 32766)])
def test_sqlite_variable_limit(version, ceiling):
    info = DialectResolutionInfo.from_connection(FakeConnection([[(version,)]]), "sqlite")
    assert info.in_list_ceiling == ceiling


def test_version_tuple_without_version():
    assert DialectResolutionInfo("oracle").version_tuple == ()


def test_introspection_unavailable_for_oracle():
    config = DialectConfig.from_dsn("oracle://scott:tiger@db/orcl?introspect=true")
    with pytest.raises(DialectConfigurationError, match="Introspection is not available"):
        introspect(config)
