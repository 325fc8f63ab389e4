"""
Oracle dialect implementation (12c and later).
"""

from __future__ import annotations

from typing import Final

from ..locking import LockClauses, RowLockStrategy
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

NAME: Final[str] = "oracle"

IN_LIST_CEILING: Final[int] = 1000
MAX_VARCHAR_LENGTH: Final[int] = 4000
MAX_NVARCHAR_LENGTH: Final[int] = 2000
MAX_RAW_LENGTH: Final[int] = 2000

CAPABILITIES: Final[DialectCapabilities] = DialectCapabilities(
    supports_returning=True,
    supports_savepoints=True,
    supports_schema_namespaces=True,
    supports_comment_on=True,
    supports_identity_columns=True,
    supports_sequences=True,
    supports_pooled_sequences=True,
    can_create_schema=False,
    supports_alter_column_type=True,
    is_lock_timeout_parameterized=True,
    supports_tuple_distinct_counts=False,
    supports_row_value_constructor_syntax_in_in_list=True,
    supports_window_functions=True,
    supports_partition_by=True,
    supports_recursive_ctes=True,
    supports_lateral=True,
    supports_values_list_for_insert=False,
    supports_no_columns_insert=False,
    is_empty_string_treated_as_null=True,
    supports_bit_type=False,
    supports_current_timestamp_selection=True,
    supports_ref_cursors=True,
    supports_guid_selection=True,
)

SYNTAX: Final[DialectSyntax] = DialectSyntax(
    param_style="numeric",
    limit_style=LimitStyle.OFFSET_FETCH,
    query_hint_style=QueryHintStyle.INLINE_COMMENT,
    cascade_constraints_string=" cascade constraints",
    identity_column_string=" generated by default on null as identity",
    add_column_string="add",
    sequence_next_value="?1.nextval",
    sequence_next_value_select="select ?1.nextval from dual",
    binary_literal_pattern="hextoraw('?1')",
    current_timestamp_select="select systimestamp from dual",
    select_guid="select rawtohex(sys_guid()) from dual",
    result_set_call_pattern="begin ?1(?2); end;",
    result_set_out_parameter=True,
)

LOCK_CLAUSES: Final[LockClauses] = LockClauses(
    nowait_suffix=" nowait",
    skip_locked_suffix=" skip locked",
    wait_suffix=" wait {seconds}",
    write_row_lock_strategy=RowLockStrategy.COLUMN,
)

KEYWORDS: Final[tuple[str, ...]] = (
    "access",
    "audit",
    "cluster",
    "comment",
    "compress",
    "exclusive",
    "file",
    "identified",
    "level",
    "lock",
    "long",
    "minus",
    "mode",
    "nowait",
    "number",
    "raw",
    "rowid",
    "rownum",
    "share",
    "size",
    "synonym",
    "sysdate",
    "uid",
    "varchar2",
)


def oracle_builder() -> DialectBuilder:
    builder = DialectBuilder(NAME)
    builder.capabilities = CAPABILITIES
    builder.syntax = SYNTAX
    builder.with_defaults(in_list_ceiling=IN_LIST_CEILING, max_identifier_length=128)
    builder.with_lock_clauses(LOCK_CLAUSES)

    types = builder.type_names
    types.register(TypeCode.BIT, "number(1,0)")
    types.register(TypeCode.BOOLEAN, "number(1,0)")
    types.register(TypeCode.TINYINT, "number(3,0)")
    types.register(TypeCode.SMALLINT, "number(5,0)")
    types.register(TypeCode.INTEGER, "number(10,0)")
    types.register(TypeCode.BIGINT, "number(19,0)")
    types.register(TypeCode.REAL, "binary_float")
    types.register(TypeCode.DOUBLE, "binary_double")
    types.register(TypeCode.NUMERIC, "number($p,$s)")
    types.register(TypeCode.DECIMAL, "number($p,$s)")
    types.register(TypeCode.TIME, "date")
    types.register(TypeCode.TIME_WITH_TIMEZONE, "timestamp with time zone")
    types.register(TypeCode.INTERVAL_SECOND, "interval day to second($s)")
    types.register(TypeCode.CHAR, "char($l char)", MAX_NVARCHAR_LENGTH)
    types.register(TypeCode.CHAR, "clob")
    types.register(TypeCode.VARCHAR, "varchar2($l char)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.VARCHAR, "clob")
    types.register(TypeCode.NCHAR, "nchar($l)", MAX_NVARCHAR_LENGTH // 2)
    types.register(TypeCode.NCHAR, "nclob")
    types.register(TypeCode.NVARCHAR, "nvarchar2($l)", MAX_NVARCHAR_LENGTH)
    types.register(TypeCode.NVARCHAR, "nclob")
    types.register(TypeCode.BINARY, "raw($l)", MAX_RAW_LENGTH)
    types.register(TypeCode.BINARY, "blob")
    types.register(TypeCode.VARBINARY, "raw($l)", MAX_RAW_LENGTH)
    types.register(TypeCode.VARBINARY, "blob")

    builder.keywords.register_all(KEYWORDS)

    functions = builder.functions
    functions.register_native("ifnull", "nvl", min_args=2, max_args=2)
    functions.register_native("length", min_args=1, max_args=1)
    functions.register_native("ceiling", "ceil", min_args=1, max_args=1)
    functions.register_native("substring", "substr", min_args=2, max_args=3)
    functions.register_pattern("locate", "instr(?2, ?1)")
    functions.register_pattern("left", "substr(?1, 1, ?2)")
    functions.register_pattern("right", "substr(?1, -(?2))")
    functions.register_pattern("str", "to_char(?1)")
    functions.register_nullary("current_time", "current_timestamp")
    return builder


def get_oracle_dialect(info: DialectResolutionInfo | None = None) -> Dialect:
    return oracle_builder().apply_resolution_info(info).build()
