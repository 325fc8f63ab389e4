import logging

import pytest

from portsql.dialects import get_dialect
from portsql.dialects.generic import generic_builder
from portsql.errors import ConfigurationConflictError, NoMappingError, UnsupportedCapabilityError
from portsql.schema import Column, ForeignKey, Index, SchemaBuilder, Table, UniqueKey
from portsql.types import TypeCode

users = Table(
    "users",
    columns=(
        Column("id", TypeCode.BIGINT, nullable=False),
        Column("name", TypeCode.VARCHAR, length=100, nullable=False),
        Column("email", TypeCode.VARCHAR, unique=True),
    ),
    primary_key=("id",),
    unique_keys=(UniqueKey("uk_users_name", ("name",)),),
    indexes=(Index("ix_users_email", ("email",)),),
)

orders = Table(
    "orders",
    columns=(
        Column("id", TypeCode.INTEGER, nullable=False),
        Column("user_id", TypeCode.BIGINT),
    ),
    primary_key=("id",),
    foreign_keys=(ForeignKey("fk_orders_user", ("user_id",), "users", cascade_delete=True),),
)


def test_create_table_sql():
    builder = SchemaBuilder(get_dialect("postgresql"))
    assert builder.create_table_sql(users) == [
        'create table "users" ("id" bigint not null, "name" varchar(100) not null, '
        '"email" varchar(255) unique, primary key ("id"))'
    ]


def test_create_table_sql_mysql_table_type():
    statement = SchemaBuilder(get_dialect("mysql")).create_table_sql(users)[0]
    assert statement.startswith("create table `users` (`id` bigint not null")
    assert statement.endswith("primary key (`id`)) engine=InnoDB")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("generic", 'drop table "users"'),
        ("postgresql", 'drop table if exists "users" cascade'),
        ("mysql", "drop table if exists `users`"),
        ("sqlite", 'drop table if exists "users"'),
        ("oracle", 'drop table "users" cascade constraints'),
        ("sqlserver", "drop table if exists [users]"),
    ],
)
def test_drop_table_sql(name, expected):
    assert SchemaBuilder(get_dialect(name)).drop_table_sql(users) == expected


def test_drop_table_if_exists_after_name():
    dialect = generic_builder().with_capabilities(supports_if_exists_after_table_name=True).build()
    assert dialect.schema_builder.drop_table_sql(users) == 'drop table "users" if exists'


def test_drop_table_logs_warning(caplog):
    caplog.set_level(logging.WARNING, logger="portsql.schema.exporters")
    SchemaBuilder(get_dialect("sqlite")).drop_table_sql(users)
    assert any("DROP TABLE generated" in record.message for record in caplog.records)


def test_conflicting_if_exists_placements(caplog):
    caplog.set_level(logging.WARNING, logger="portsql.schema.exporters")
    dialect = (
        generic_builder()
        .with_capabilities(
            supports_if_exists_before_table_name=True,
            supports_if_exists_after_table_name=True,
        )
        .build()
    )
    with pytest.raises(ConfigurationConflictError) as excinfo:
        dialect.schema_builder.drop_table_sql(users)
    assert excinfo.value.options == (
        "supports_if_exists_before_table_name",
        "supports_if_exists_after_table_name",
    )
    assert not any("DROP TABLE generated" in record.message for record in caplog.records)


def test_conflicting_constraint_placements():
    dialect = (
        generic_builder()
        .with_capabilities(
            supports_if_exists_before_constraint_name=True,
            supports_if_exists_after_constraint_name=True,
        )
        .build()
    )
    with pytest.raises(ConfigurationConflictError):
        dialect.schema_builder.drop_foreign_key_sql(orders.foreign_keys[0], orders)
    with pytest.raises(ConfigurationConflictError):
        dialect.schema_builder.drop_unique_key_sql(users.unique_keys[0], users)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("postgresql", '"id" bigint generated by default as identity'),
        ("mysql", "`id` bigint not null auto_increment"),
        ("sqlite", '"id" integer'),
        ("oracle", '"id" number(19,0) generated by default on null as identity'),
        ("sqlserver", "[id] bigint identity not null"),
    ],
)
def test_identity_columns(name, expected):
    table = Table("t", columns=(Column("id", TypeCode.BIGINT, identity=True, nullable=False),), primary_key=("id",))
    assert get_dialect(name).schema_builder.tables.column_definition(table, table.columns[0]) == expected


def test_identity_columns_unsupported():
    dialect = generic_builder().with_capabilities(supports_identity_columns=False).build()
    table = Table("t", columns=(Column("id", TypeCode.BIGINT, identity=True),), primary_key=("id",))
    with pytest.raises(UnsupportedCapabilityError) as excinfo:
        dialect.schema_builder.create_table_sql(table)
    assert excinfo.value.capability == "identity columns"


def test_column_defaults_checks_and_explicit_types():
    table = Table(
        "accounts",
        columns=(
            Column("balance", TypeCode.NUMERIC, precision=12, scale=2, default="0", check="balance >= 0"),
            Column("payload", TypeCode.VARCHAR, sql_type="jsonb"),
        ),
        checks=("balance < 1000000",),
    )
    statement = get_dialect("postgresql").schema_builder.create_table_sql(table)[0]
    assert statement == (
        'create table "accounts" ("balance" numeric(12,2) default 0 check (balance >= 0), '
        '"payload" jsonb, check (balance < 1000000))'
    )


def test_table_checks_unsupported():
    dialect = generic_builder().with_capabilities(supports_table_check=False).build()
    with pytest.raises(UnsupportedCapabilityError):
        dialect.schema_builder.create_table_sql(Table("t", columns=(Column("a", TypeCode.INTEGER),), checks=("a > 0",)))


def test_unresolved_type_placeholder_raises():
    builder = generic_builder()
    builder.type_names.register(TypeCode.DATE, "date($p)")
    dialect = builder.build()
    with pytest.raises(NoMappingError, match="leaves \\$p unresolved"):
        dialect.schema_builder.create_table_sql(Table("t", columns=(Column("d", TypeCode.DATE),)))


def test_comments_postgres():
    table = Table(
        "users",
        columns=(Column("name", TypeCode.VARCHAR, comment="Display name"),),
        comment="User's accounts",
    )
    assert get_dialect("postgresql").schema_builder.create_table_sql(table) == [
        'create table "users" ("name" varchar(255))',
        "comment on table \"users\" is 'User''s accounts'",
        "comment on column \"users\".\"name\" is 'Display name'",
    ]


def test_comments_mysql_inline():
    table = Table(
        "users",
        columns=(Column("name", TypeCode.VARCHAR, comment="Display name"),),
        comment="Accounts",
    )
    assert get_dialect("mysql").schema_builder.create_table_sql(table) == [
        "create table `users` (`name` varchar(255) comment 'Display name') engine=InnoDB comment='Accounts'"
    ]


def test_sqlite_foreign_keys_inline():
    builder = get_dialect("sqlite").schema_builder
    assert builder.ddl_for(orders) == [
        'create table "orders" ("id" integer not null, "user_id" bigint, primary key ("id"), '
        'foreign key ("user_id") references "users" on delete cascade)'
    ]
    with pytest.raises(UnsupportedCapabilityError):
        builder.create_foreign_key_sql(orders.foreign_keys[0], orders)


def test_foreign_keys_postgres():
    builder = get_dialect("postgresql").schema_builder
    fk = orders.foreign_keys[0]
    assert builder.create_foreign_key_sql(fk, orders) == [
        'alter table if exists "orders" add constraint "fk_orders_user" foreign key ("user_id") '
        'references "users" on delete cascade'
    ]
    assert builder.drop_foreign_key_sql(fk, orders) == [
        'alter table if exists "orders" drop constraint if exists "fk_orders_user"'
    ]


def test_foreign_key_to_named_columns_mysql():
    fk = ForeignKey("fk_orders_user", ("user_email",), "users", ("email",))
    builder = get_dialect("mysql").schema_builder
    assert builder.create_foreign_key_sql(fk, orders) == [
        "alter table `orders` add constraint `fk_orders_user` foreign key (`user_email`) references `users` (`email`)"
    ]
    assert builder.drop_foreign_key_sql(fk, orders) == [
        "alter table `orders` drop foreign key `fk_orders_user`"
    ]


def test_cascade_delete_unsupported():
    dialect = generic_builder().with_capabilities(supports_cascade_delete=False).build()
    with pytest.raises(UnsupportedCapabilityError):
        dialect.schema_builder.create_foreign_key_sql(orders.foreign_keys[0], orders)


def test_unique_keys_alter_table():
    builder = get_dialect("postgresql").schema_builder
    key = users.unique_keys[0]
    assert builder.create_unique_key_sql(key, users) == [
        'alter table if exists "users" add constraint "uk_users_name" unique ("name")'
    ]
    assert builder.drop_unique_key_sql(key, users) == [
        'alter table if exists "users" drop constraint if exists "uk_users_name"'
    ]
    assert get_dialect("mysql").schema_builder.drop_unique_key_sql(key, users) == [
        "alter table `users` drop index `uk_users_name`"
    ]


def test_unique_keys_inside_create_table_sqlite():
    builder = get_dialect("sqlite").schema_builder
    statement = builder.create_table_sql(users)[0]
    assert 'constraint "uk_users_name" unique ("name")' in statement
    assert builder.create_unique_key_sql(users.unique_keys[0], users) == []
    assert builder.drop_unique_key_sql(users.unique_keys[0], users) == []


def test_unique_key_requires_columns():
    with pytest.raises(ValueError):
        get_dialect("postgresql").schema_builder.create_unique_key_sql(UniqueKey("uk", ()), users)


def test_indexes():
    postgres = get_dialect("postgresql").schema_builder
    assert postgres.create_index_sql(users.indexes[0], users) == [
        'create index "ix_users_email" on "users" ("email")'
    ]
    scoped = Table("users", columns=users.columns, schema="app")
    unique = Index("ux_users_name", ("name",), unique=True)
    assert postgres.create_index_sql(unique, scoped) == [
        'create unique index "app"."ux_users_name" on "app"."users" ("name")'
    ]
    assert postgres.drop_index_sql(users.indexes[0], users) == ['drop index "ix_users_email"']
    assert get_dialect("mysql").schema_builder.drop_index_sql(users.indexes[0], users) == [
        "drop index `ix_users_email` on `users`"
    ]
    with pytest.raises(ValueError):
        postgres.create_index_sql(Index("ix_empty", ()), users)


def test_ddl_for_orders_statements():
    statements = get_dialect("postgresql").ddl_for(users)
    assert len(statements) == 3
    assert statements[0].startswith('create table "users"')
    assert statements[1].startswith('create index "ix_users_email"')
    assert statements[2].endswith('add constraint "uk_users_name" unique ("name")')

    with_fk = get_dialect("postgresql").ddl_for(orders)
    assert with_fk[-1].startswith('alter table if exists "orders" add constraint "fk_orders_user"')


def test_qualified_table_names():
    table = Table("events", columns=(Column("id", TypeCode.INTEGER),), schema="analytics", catalog="main")
    assert table.qualified_name == "main.analytics.events"
    statement = get_dialect("sqlserver").schema_builder.create_table_sql(table)[0]
    assert statement == "create table [main].[analytics].[events] ([id] integer)"
    with pytest.raises(KeyError):
        table.column("missing")
