import sqlite3

from portsql.config import DialectConfig
from portsql.dialects import get_sqlite_dialect, resolve_dialect
from portsql.resolution import DialectResolutionInfo
from portsql.schema import Column, ForeignKey, Index, Table, UniqueKey
from portsql.types import TypeCode

users = Table(
    "users",
    columns=(
        Column("id", TypeCode.INTEGER, nullable=False),
        Column("name", TypeCode.VARCHAR, length=100, nullable=False),
        Column("active", TypeCode.BOOLEAN, default="1", check='"active" in (0,1)'),
    ),
    primary_key=("id",),
    unique_keys=(UniqueKey("uk_users_name", ("name",)),),
    indexes=(Index("ix_users_active", ("active",)),),
)

orders = Table(
    "orders",
    columns=(
        Column("id", TypeCode.INTEGER, nullable=False),
        Column("user_id", TypeCode.INTEGER, nullable=False),
    ),
    primary_key=("id",),
    foreign_keys=(ForeignKey("fk_orders_user", ("user_id",), "users", cascade_delete=True),),
)


def test_from_connection_reports_sqlite_version():
    connection = sqlite3.connect(":memory:")
    try:
        info = DialectResolutionInfo.from_connection(connection, "sqlite")
    finally:
        connection.close()
    assert info.version == sqlite3.sqlite_version
    assert info.version_tuple == sqlite3.sqlite_version_info
    expected = 32766 if sqlite3.sqlite_version_info >= (3, 32) else 999
    assert info.in_list_ceiling == expected


def test_resolve_dialect_introspects_memory_database():
    config = DialectConfig.from_dsn("sqlite:///:memory:?introspect=true")
    dialect = resolve_dialect(config)
    assert dialect.name == "sqlite"
    assert dialect.version == sqlite3.sqlite_version_info


def test_generated_ddl_executes():
    dialect = get_sqlite_dialect()
    connection = sqlite3.connect(":memory:")
    try:
        for statement in dialect.ddl_for(users) + dialect.ddl_for(orders):
            connection.execute(statement)
        connection.executemany(
            'insert into "users" ("id", "name") values (?, ?)',
            [(index, f"user-{index}") for index in range(1, 6)],
        )
        sql, params = dialect.render_in_list('"id"', [1, 3, 5])
        rows = connection.execute(f'select "name" from "users" where {sql} order by "id"', params).fetchall()
        assert [row[0] for row in rows] == ["user-1", "user-3", "user-5"]

        connection.execute(dialect.schema_builder.drop_table_sql(orders))
        connection.execute(dialect.schema_builder.drop_table_sql(orders))
    finally:
        connection.close()


def test_generated_functions_execute():
    dialect = get_sqlite_dialect()
    connection = sqlite3.connect(":memory:")
    try:
        expression = ", ".join(
            [
                dialect.render_function("locate", ["'b'", "'abc'"]),
                dialect.render_function("left", ["'abcdef'", "2"]),
                dialect.render_function("concat", ["'a'", "'b'"]),
                dialect.render_function("greatest", ["1", "5"]),
            ]
        )
        row = connection.execute(f"select {expression}").fetchone()
        assert row == (2, "ab", "ab", 5)
    finally:
        connection.close()
