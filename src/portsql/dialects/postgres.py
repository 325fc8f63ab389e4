"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from ..locking import LockClauses, RowLockStrategy
from ..resolution import DialectResolutionInfo
from ..types import TypeCode
from .base import Dialect, DialectBuilder, DialectCapabilities, DialectSyntax

NAME: Final[str] = "postgresql"

# varchar(n) accepts at most 10485760 characters
MAX_VARCHAR_LENGTH: Final[int] = 10_485_760

CAPABILITIES: Final[DialectCapabilities] = DialectCapabilities(
    supports_returning=True,
    supports_savepoints=True,
    supports_partial_indexes=True,
    supports_schema_namespaces=True,
    supports_if_exists_before_table_name=True,
    supports_if_exists_before_constraint_name=True,
    supports_if_exists_after_alter_table=True,
    supports_comment_on=True,
    supports_identity_columns=True,
    supports_sequences=True,
    supports_pooled_sequences=True,
    supports_alter_column_type=True,
    supports_case_insensitive_like=True,
    supports_offset_in_subquery=True,
    supports_tuple_distinct_counts=False,
    supports_row_value_constructor_syntax=True,
    supports_row_value_constructor_syntax_in_in_list=True,
    supports_window_functions=True,
    supports_partition_by=True,
    supports_non_query_with_cte=True,
    supports_recursive_ctes=True,
    supports_lateral=True,
    supports_values_list=True,
    supports_distinct_from_predicate=True,
    supports_is_true=True,
    supports_temporal_literal_offset=True,
    supports_boolean_type=True,
    supports_current_timestamp_selection=True,
    supports_ref_cursors=True,
    supports_guid_selection=True,
)

SYNTAX: Final[DialectSyntax] = DialectSyntax(
    param_style="pyformat",
    cascade_constraints_string=" cascade",
    drop_sequence_string="drop sequence if exists ",
    sequence_next_value="nextval('?1')",
    sequence_next_value_select="select nextval('?1')",
    drop_schema_command="drop schema if exists ?1 cascade",
    true_literal="true",
    false_literal="false",
    binary_literal_pattern="bytea '\\x?1'",
    current_timestamp_select="select now()",
    select_guid="select gen_random_uuid()",
    result_set_call_pattern="select ?1(?2)",
)

LOCK_CLAUSES: Final[LockClauses] = LockClauses(
    read_keyword=" for share",
    nowait_suffix=" nowait",
    skip_locked_suffix=" skip locked",
    write_row_lock_strategy=RowLockStrategy.TABLE,
)

KEYWORDS: Final[tuple[str, ...]] = (
    "analyse",
    "analyze",
    "ilike",
    "limit",
    "offset",
    "returning",
    "verbose",
    "variadic",
    "placing",
)


def postgres_builder() -> DialectBuilder:
    builder = DialectBuilder(NAME)
    builder.capabilities = CAPABILITIES
    builder.syntax = SYNTAX
    builder.with_defaults(max_identifier_length=63)
    builder.with_lock_clauses(LOCK_CLAUSES)

    types = builder.type_names
    types.register(TypeCode.TINYINT, "smallint")
    types.register(TypeCode.BINARY, "bytea")
    types.register(TypeCode.VARBINARY, "bytea")
    types.register(TypeCode.LONGVARBINARY, "bytea")
    types.register(TypeCode.BLOB, "bytea")
    types.register(TypeCode.VARCHAR, "varchar($l)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.VARCHAR, "text")
    types.register(TypeCode.LONGVARCHAR, "text")
    types.register(TypeCode.NCHAR, "char($l)")
    types.register(TypeCode.NVARCHAR, "varchar($l)", MAX_VARCHAR_LENGTH)
    types.register(TypeCode.NVARCHAR, "text")
    types.register(TypeCode.LONGNVARCHAR, "text")
    types.register(TypeCode.CLOB, "text")
    types.register(TypeCode.NCLOB, "text")
    types.register(TypeCode.INTERVAL_SECOND, "interval")

    builder.keywords.register_all(KEYWORDS)

    functions = builder.functions
    functions.register_native("every", "bool_and", min_args=1, max_args=1)
    functions.register_native("any", "bool_or", min_args=1, max_args=1)
    functions.register_native("length", min_args=1, max_args=1)
    functions.register_pattern("str", "cast(?1 as text)")
    return builder


def get_postgres_dialect(info: DialectResolutionInfo | None = None) -> Dialect:
    return postgres_builder().apply_resolution_info(info).build()
