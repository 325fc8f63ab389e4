"""
MySQL dialect implementation (8.0 and later).
"""

from __future__ import annotations

from typing import Final

from ..locking import LockClauses, RowLockStrategy
from ..resolution import DialectResolutionInfo
from ..types import TypeCode
from .base import Dialect, DialectBuilder, DialectCapabilities, DialectSyntax

NAME: Final[str] = "mysql"

# 65535 byte row limit over 4-byte utf8mb4 characters
MAX_VARCHAR_LENGTH: Final[int] = 16_383
MAX_TEXT_LENGTH: Final[int] = 65_535
MAX_MEDIUM_LENGTH: Final[int] = 16_777_215

CAPABILITIES: Final[DialectCapabilities] = DialectCapabilities(
    supports_returning=False,
    supports_savepoints=True,
    supports_partial_indexes=False,
    supports_schema_namespaces=False,
    qualify_index_name=False,
    drop_index_requires_table=True,
    supports_if_exists_before_table_name=True,
    supports_identity_columns=True,
    can_create_catalog=True,
    can_create_schema=False,
    supports_alter_column_type=True,
    supports_subquery_on_mutating_table=False,
    supports_null_precedence=False,
    supports_row_value_constructor_syntax=True,
    supports_row_value_constructor_syntax_in_in_list=True,
    supports_window_functions=True,
    supports_partition_by=True,
    supports_recursive_ctes=True,
    supports_lateral=True,
    supports_values_list=True,
    supports_current_timestamp_selection=True,
    supports_guid_selection=True,
)

SYNTAX: Final[DialectSyntax] = DialectSyntax(
    open_quote="`",
    close_quote="`",
    param_style="pyformat",
    unbounded_limit="18446744073709551615",
    table_type_string=" engine=InnoDB",
    identity_column_string=" not null auto_increment",
    add_column_string="add column",
    drop_foreign_key_string=" drop foreign key ",
    drop_unique_key_string="drop index",
    table_comment_pattern=" comment='?1'",
    column_comment_pattern=" comment '?1'",
    binary_literal_pattern="x'?1'",
    current_timestamp_select="select now()",
    select_guid="select uuid()",
)

LOCK_CLAUSES: Final[LockClauses] = LockClauses(
    read_keyword=" for share",
    nowait_suffix=" nowait",
    skip_locked_suffix=" skip locked",
    write_row_lock_strategy=RowLockStrategy.TABLE,
)

KEYWORDS: Final[tuple[str, ...]] = (
    "databases",
    "describe",
    "div",
    "fulltext",
    "index",
    "key",
    "keys",
    "limit",
    "optimize",
    "regexp",
    "rlike",
    "schema",
    "show",
    "spatial",
    "straight_join",
    "unsigned",
    "usage",
    "xor",
    "zerofill",
)


def mysql_builder() -> DialectBuilder:
    builder = DialectBuilder(NAME)
    builder.capabilities = CAPABILITIES
    builder.syntax = SYNTAX
    builder.with_defaults(max_identifier_length=64)
    builder.with_lock_clauses(LOCK_CLAUSES)

    types = builder.type_names
    types.register(TypeCode.BOOLEAN, "bit")
    types.register(TypeCode.NUMERIC, "decimal($p,$s)")
    types.register(TypeCode.TIMESTAMP, "datetime($p)")
    types.register(TypeCode.TIMESTAMP_WITH_TIMEZONE, "timestamp($p)")
    types.register(TypeCode.TIME_WITH_TIMEZONE, "time")
    types.register(TypeCode.INTERVAL_SECOND, "decimal($p,$s)")
    for code in (TypeCode.VARCHAR, TypeCode.NVARCHAR):
        types.register(code, "varchar($l)", MAX_VARCHAR_LENGTH)
        types.register(code, "text", MAX_TEXT_LENGTH)
        types.register(code, "mediumtext", MAX_MEDIUM_LENGTH)
        types.register(code, "longtext")
    types.register(TypeCode.NCHAR, "char($l)")
    types.register(TypeCode.VARBINARY, "varbinary($l)", MAX_TEXT_LENGTH)
    types.register(TypeCode.VARBINARY, "mediumblob", MAX_MEDIUM_LENGTH)
    types.register(TypeCode.VARBINARY, "longblob")
    types.register(TypeCode.BLOB, "longblob")
    types.register(TypeCode.CLOB, "longtext")
    types.register(TypeCode.NCLOB, "longtext")

    builder.keywords.register_all(KEYWORDS)

    functions = builder.functions
    functions.register_native("concat", min_args=1)
    functions.register_native("length", "char_length", min_args=1, max_args=1)
    functions.register_native("locate", min_args=2, max_args=3)
    functions.register_pattern("str", "cast(?1 as char)")
    return builder


def get_mysql_dialect(info: DialectResolutionInfo | None = None) -> Dialect:
    return mysql_builder().apply_resolution_info(info).build()
