"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from ..locking import LockClauses
from ..resolution import DialectResolutionInfo
from ..schema.exporters import CreateTableUniqueDelegate
from ..types import TypeCode
from .base import Dialect, DialectBuilder, DialectCapabilities, DialectSyntax, TrimStyle

NAME: Final[str] = "sqlite"

# SQLITE_MAX_VARIABLE_NUMBER on builds older than 3.32
DEFAULT_IN_LIST_CEILING: Final[int] = 999

CAPABILITIES: Final[DialectCapabilities] = DialectCapabilities(
    supports_returning=True,
    supports_savepoints=True,
    supports_partial_indexes=True,
    supports_schema_namespaces=False,
    has_alter_table=False,
    drop_constraints=False,
    qualify_index_name=False,
    supports_if_exists_before_table_name=True,
    supports_identity_columns=True,
    has_data_type_in_identity_column=False,
    can_create_schema=False,
    supports_lock_timeouts=False,
    supports_outer_join_for_update=False,
    supports_tuple_distinct_counts=False,
    supports_row_value_constructor_syntax=True,
    supports_window_functions=True,
    supports_partition_by=True,
    supports_recursive_ctes=True,
    supports_values_list=True,
    supports_is_true=True,
    supports_bit_type=False,
    supports_nationalized_types=False,
    supports_current_timestamp_selection=True,
    supports_guid_selection=True,
)

SYNTAX: Final[DialectSyntax] = DialectSyntax(
    param_style="qmark",
    unbounded_limit="-1",
    trim_style=TrimStyle.FUNCTION,
    identity_column_string=" integer",
    extract_pattern="cast(strftime('?1', ?2) as integer)",
    extract_units=(
        ("year", "%Y"),
        ("month", "%m"),
        ("day", "%d"),
        ("hour", "%H"),
        ("minute", "%M"),
        ("second", "%S"),
    ),
    current_timestamp_select="select current_timestamp",
    select_guid="select lower(hex(randomblob(16)))",
)

# no row locking: the whole database is locked by the writer
LOCK_CLAUSES: Final[LockClauses] = LockClauses(write_keyword="", read_keyword="")


def sqlite_builder() -> DialectBuilder:
    builder = DialectBuilder(NAME)
    builder.capabilities = CAPABILITIES
    builder.syntax = SYNTAX
    builder.with_defaults(in_list_ceiling=DEFAULT_IN_LIST_CEILING)
    builder.with_lock_clauses(LOCK_CLAUSES)
    builder.unique_delegate = CreateTableUniqueDelegate()

    types = builder.type_names
    types.register(TypeCode.BIT, "integer")
    types.register(TypeCode.BOOLEAN, "integer")
    types.register(TypeCode.FLOAT, "float")
    types.register(TypeCode.DOUBLE, "double")
    types.register(TypeCode.BINARY, "blob")
    types.register(TypeCode.VARBINARY, "blob")
    types.register(TypeCode.TIMESTAMP, "timestamp")
    types.register(TypeCode.TIMESTAMP_WITH_TIMEZONE, "timestamp")
    types.register(TypeCode.TIME_WITH_TIMEZONE, "time")
    types.register(TypeCode.INTERVAL_SECOND, "numeric($p,$s)")

    functions = builder.functions
    functions.register_native("length", min_args=1, max_args=1)
    functions.register_native("substring", "substr", min_args=2, max_args=3)
    functions.register_native("least", "min", min_args=2)
    functions.register_native("greatest", "max", min_args=2)
    functions.register_pattern("locate", "instr(?2, ?1)")
    functions.register_pattern("left", "substr(?1, 1, ?2)")
    functions.register_pattern("right", "substr(?1, -(?2))")
    functions.register_pattern("str", "cast(?1 as text)")
    return builder


def get_sqlite_dialect(info: DialectResolutionInfo | None = None) -> Dialect:
    return sqlite_builder().apply_resolution_info(info).build()
