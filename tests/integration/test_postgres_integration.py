import os
import uuid

import pytest

from portsql.config import DialectConfig
from portsql.dialects import resolve_dialect
from portsql.locking import NO_WAIT, LockMode, LockOptions
from portsql.schema import Column, Table
from portsql.types import TypeCode


def _require_postgres_config():
    try:
        import psycopg  # noqa: F401
    except ImportError:
        pytest.skip("psycopg driver not installed")
    dsn = os.getenv("PORTSQL_POSTGRES_DSN")
    if not dsn:
        pytest.skip("PORTSQL_POSTGRES_DSN not set; skipping Postgres integration test")
    return DialectConfig.from_dsn(dsn, introspect=True)


def test_postgres_introspection_and_ddl():
    config = _require_postgres_config()
    import psycopg

    try:
        dialect = resolve_dialect(config)
    except Exception as exc:  # pragma: no cover - environment dependent
        pytest.skip(f"Cannot connect to Postgres for integration test: {exc}")
    assert dialect.version

    table = Table(
        f"portsql_pg_{uuid.uuid4().hex[:8]}",
        columns=(
            Column("id", TypeCode.BIGINT, identity=True, nullable=False),
            Column("name", TypeCode.VARCHAR, length=50),
        ),
        primary_key=("id",),
    )
    url = config.connection_url().replace(config.dsn.scheme + "://", "postgresql://", 1)
    with psycopg.connect(url) as connection:
        try:
            for statement in dialect.ddl_for(table):
                connection.execute(statement)
            connection.execute(
                f"insert into {dialect.format_table(table.name)} (name) values (%s)", ("pg-ok",)
            )
            row = connection.execute(
                f"select name from {dialect.format_table(table.name)}"
                + dialect.for_update_fragment_for(LockOptions(LockMode.PESSIMISTIC_WRITE, NO_WAIT))
            ).fetchone()
            assert row[0] == "pg-ok"
        finally:
            connection.execute(dialect.schema_builder.drop_table_sql(table))
