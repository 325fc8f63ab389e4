"""
Microsoft SQL Server dialect implementation (2016 and later).
"""

from __future__ import annotations

from typing import Final

from ..locking import LockClauses, TableHintLocking
from ..resolution import DialectResolutionInfo
from ..types import TypeCode
from .base import (
    Dialect,
    DialectBuilder,
    DialectCapabilities,
    DialectSyntax,
    LimitStyle,
    QueryHintStyle,
)

NAME: Final[str] = "sqlserver"

# maximum number of parameters per request
IN_LIST_CEILING: Final[int] = 2100
MAX_VARCHAR_LENGTH: Final[int] = 8000
MAX_NVARCHAR_LENGTH: Final[int] = 4000

CAPABILITIES: Final[DialectCapabilities] = DialectCapabilities(
    supports_returning=False,
    supports_savepoints=True,
    supports_partial_indexes=True,
    supports_schema_namespaces=True,
    qualify_index_name=False,
    drop_index_requires_table=True,
    supports_if_exists_before_table_name=True,
    supports_if_exists_before_constraint_name=True,
    supports_identity_columns=True,
    supports_sequences=True,
    supports_pooled_sequences=True,
    can_create_catalog=True,
    supports_alter_column_type=True,
    supports_no_wait=True,
    supports_skip_locked=True,
    does_read_committed_cause_writers_to_block_readers=True,
    does_repeatable_read_cause_readers_to_block_writers=True,
    supports_null_precedence=False,
    supports_tuple_distinct_counts=False,
    supports_window_functions=True,
    supports_partition_by=True,
    supports_recursive_ctes=True,
    supports_lateral=True,
    supports_values_list=True,
    supports_current_timestamp_selection=True,
    supports_guid_selection=True,
)

SYNTAX: Final[DialectSyntax] = DialectSyntax(
    open_quote="[",
    close_quote="]",
    param_style="qmark",
    limit_style=LimitStyle.OFFSET_FETCH,
    query_hint_style=QueryHintStyle.OPTION,
    identity_column_string=" identity not null",
    add_column_string="add",
    sequence_next_value="next value for ?1",
    sequence_next_value_select="select next value for ?1",
    extract_pattern="datepart(?1, ?2)",
    binary_literal_pattern="0x?1",
    current_timestamp_select="select current_timestamp",
    select_guid="select newid()",
)

# rows are locked through table hints, not a trailing clause
LOCK_CLAUSES: Final[LockClauses] = LockClauses(write_keyword="", read_keyword="")

KEYWORDS: Final[tuple[str, ...]] = (
    "backup",
    "browse",
    "checkpoint",
    "clustered",
    "dbcc",
    "holdlock",
    "identity_insert",
    "identitycol",
    "nocheck",
    "nonclustered",
    "openquery",
    "percent",
    "pivot",
    "readtext",
    "rowcount",
    "rowguidcol",
    "top",
    "tran",
    "tsequal",
    "unpivot",
    "updatetext",
    "waitfor",
    "writetext",
)


def sqlserver_builder() -> DialectBuilder:
    builder = DialectBuilder(NAME)
    builder.capabilities = CAPABILITIES
    builder.syntax = SYNTAX
    builder.with_defaults(in_list_ceiling=IN_LIST_CEILING, max_identifier_length=128)
    builder.with_lock_clauses(LOCK_CLAUSES, TableHintLocking())

    types = builder.type_names
    types.register(TypeCode.BOOLEAN, "bit")
    types.register(TypeCode.TINYINT, "smallint")
    types.register(TypeCode.DOUBLE, "float")
    types.register(TypeCode.TIMESTAMP, "datetime2($p)")
    types.register(TypeCode.TIMESTAMP_WITH_TIMEZONE, "datetimeoffset($p)")
    types.register(TypeCode.TIME_WITH_TIMEZONE, "time")
    types.register(TypeCode.INTERVAL_SECOND, "numeric($p,$s)")
    types.register(TypeCode.CHAR, "char($l)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.CHAR, "varchar(max)")
    types.register(TypeCode.VARCHAR, "varchar($l)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.VARCHAR, "varchar(max)")
    types.register(TypeCode.NCHAR, "nchar($l)", MAX_NVARCHAR_LENGTH)
    types.register(TypeCode.NCHAR, "nvarchar(max)")
    types.register(TypeCode.NVARCHAR, "nvarchar($l)", MAX_NVARCHAR_LENGTH)
    types.register(TypeCode.NVARCHAR, "nvarchar(max)")
    types.register(TypeCode.BINARY, "binary($l)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.BINARY, "varbinary(max)")
    types.register(TypeCode.VARBINARY, "varbinary($l)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.VARBINARY, "varbinary(max)")
    types.register(TypeCode.BLOB, "varbinary(max)")
    types.register(TypeCode.CLOB, "varchar(max)")
    types.register(TypeCode.NCLOB, "nvarchar(max)")

    builder.keywords.register_all(KEYWORDS)

    functions = builder.functions
    functions.register_native("ifnull", "isnull", min_args=2, max_args=2)
    functions.register_native("concat", min_args=2)
    functions.register_native("length", "len", min_args=1, max_args=1)
    functions.register_native("ln", "log", min_args=1, max_args=1)
    functions.register_native("atan2", "atn2", min_args=2, max_args=2)
    functions.register_native("substring", min_args=3, max_args=3)
    functions.register_pattern("mod", "(?1 % ?2)")
    functions.register_pattern("locate", "charindex(?1, ?2)")
    functions.register_pattern("str", "cast(?1 as varchar(max))")
    functions.register_nullary("current_date", "convert(date, getdate())")
    functions.register_nullary("current_time", "convert(time, getdate())")
    return builder


def get_sqlserver_dialect(info: DialectResolutionInfo | None = None) -> Dialect:
    return sqlserver_builder().apply_resolution_info(info).build()
