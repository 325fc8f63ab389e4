"""
Dialect facade: one frozen aggregate of type names, keywords, casts,
functions, locking and DDL rules per backend, plus the builder that
assembles it.
"""

from __future__ import annotations

import datetime
import decimal
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type

from ..batching import BatchLoadSizingStrategy, render_in_list
from ..casts import CastMatrix, CastType
from ..errors import DialectConfigurationError, UnsupportedCapabilityError
from ..functions import FunctionRegistry, FunctionRegistryBuilder, register_standard_functions
from ..keywords import KeywordSet, KeywordSetBuilder
from ..locking import (
    WAIT_FOREVER,
    LockClauses,
    LockHintStrategy,
    Lockable,
    LockingStrategy,
    LockingStrategySelector,
    LockMode,
    LockOptions,
    NoLockHints,
    RowLockStrategy,
)
from ..schema.builder import SchemaBuilder
from ..schema.exporters import AlterTableUniqueDelegate, check_resolved
from ..schema.objects import Column, Table
from ..types import (
    DefaultSizeStrategy,
    LanguageType,
    LanguageTypeTable,
    LanguageTypeTableBuilder,
    Size,
    SizeDefaults,
    SizeStrategy,
    TypeCode,
    TypeNameTable,
    TypeNameTableBuilder,
)
from ..utils import get_logger, time_call

logger = get_logger("dialects")


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_returning: bool = False
    supports_savepoints: bool = True
    supports_partial_indexes: bool = False
    supports_schema_namespaces: bool = False

    # DDL
    has_alter_table: bool = True
    drop_constraints: bool = True
    qualify_index_name: bool = True
    drop_index_requires_table: bool = False
    supports_if_exists_before_table_name: bool = False
    supports_if_exists_after_table_name: bool = False
    supports_if_exists_before_constraint_name: bool = False
    supports_if_exists_after_constraint_name: bool = False
    supports_if_exists_after_alter_table: bool = False
    supports_cascade_delete: bool = True
    supports_circular_cascade_delete_constraints: bool = True
    has_self_referential_foreign_key_bug: bool = False
    supports_column_check: bool = True
    supports_table_check: bool = True
    supports_comment_on: bool = False
    supports_identity_columns: bool = False
    has_data_type_in_identity_column: bool = True
    supports_sequences: bool = False
    supports_pooled_sequences: bool = False
    can_create_catalog: bool = False
    can_create_schema: bool = True
    supports_temporary_tables: bool = True
    supports_alter_column_type: bool = False

    # locking
    supports_lock_timeouts: bool = True
    is_lock_timeout_parameterized: bool = False
    supports_outer_join_for_update: bool = True
    supports_no_wait: bool = False
    supports_wait: bool = False
    supports_skip_locked: bool = False
    use_follow_on_locking: bool = False
    does_read_committed_cause_writers_to_block_readers: bool = False
    does_repeatable_read_cause_readers_to_block_writers: bool = False

    # query syntax
    supports_limit: bool = True
    supports_limit_offset: bool = True
    supports_union_all: bool = True
    supports_union_in_subquery: bool = True
    supports_no_columns_insert: bool = True
    supports_case_insensitive_like: bool = False
    supports_truncate_with_cast: bool = True
    supports_parameters_in_insert_select: bool = True
    supports_ordinal_select_item_reference: bool = True
    supports_null_precedence: bool = True
    is_ansi_null_on: bool = True
    requires_float_casting_of_integer_division: bool = False
    supports_subselect_as_in_predicate_lhs: bool = True
    supports_subquery_on_mutating_table: bool = True
    supports_exists_in_select: bool = True
    supports_subquery_in_select: bool = True
    supports_offset_in_subquery: bool = False
    supports_order_by_in_subquery: bool = True
    supports_tuple_counts: bool = False
    supports_tuple_distinct_counts: bool = True
    requires_parens_for_tuple_distinct_counts: bool = False
    supports_row_value_constructor_syntax: bool = False
    supports_row_value_constructor_syntax_in_in_list: bool = False
    supports_window_functions: bool = False
    supports_partition_by: bool = False
    supports_non_query_with_cte: bool = False
    supports_recursive_ctes: bool = False
    supports_lateral: bool = False
    supports_values_list: bool = False
    supports_values_list_for_insert: bool = True
    supports_distinct_from_predicate: bool = False
    supports_is_true: bool = False
    supports_temporal_literal_offset: bool = False
    supports_fractional_timestamp_arithmetic: bool = True
    is_empty_string_treated_as_null: bool = False

    # types and values
    supports_bit_type: bool = True
    supports_boolean_type: bool = False
    supports_nationalized_types: bool = True
    supports_expected_lob_usage_pattern: bool = True
    supports_lob_value_change_propagation: bool = True
    supports_unbounded_lob_locator_materialization: bool = True
    use_input_stream_to_insert_blob: bool = True
    force_lob_as_last_value: bool = False

    # statements and calls
    supports_current_timestamp_selection: bool = False
    is_current_timestamp_select_string_callable: bool = False
    supports_result_set_position_query_methods_on_forward_only_cursor: bool = True
    supports_bind_as_callable_argument: bool = True
    supports_ref_cursors: bool = False
    supports_guid_selection: bool = False


class LimitStyle(Enum):
    LIMIT_OFFSET = "limit_offset"
    OFFSET_FETCH = "offset_fetch"
    NONE = "none"


class QueryHintStyle(Enum):
    NONE = "none"
    # select /*+ hint */ ...
    INLINE_COMMENT = "inline_comment"
    # ... option (hint)
    OPTION = "option"


class TrimStyle(Enum):
    ANSI = "ansi"
    FUNCTION = "function"


@dataclass(frozen=True)
class DialectSyntax:
    """
    SQL text a backend uses for fixed phrases; ``?N`` marks arguments.
    """

    open_quote: str = '"'
    close_quote: str = '"'
    param_style: str = "qmark"
    limit_style: LimitStyle = LimitStyle.LIMIT_OFFSET
    unbounded_limit: Optional[str] = None
    query_hint_style: QueryHintStyle = QueryHintStyle.NONE
    trim_style: TrimStyle = TrimStyle.ANSI

    create_table_string: str = "create table"
    table_type_string: str = ""
    null_column_string: str = ""
    identity_column_string: str = " generated by default as identity"
    cascade_constraints_string: str = ""
    add_column_string: str = "add column"
    drop_foreign_key_string: str = " drop constraint "
    drop_unique_key_string: str = "drop constraint"
    table_comment_pattern: Optional[str] = None
    column_comment_pattern: Optional[str] = None

    create_sequence_string: str = "create sequence "
    drop_sequence_string: str = "drop sequence "
    sequence_next_value: str = "next value for ?1"
    sequence_next_value_select: str = "values next value for ?1"

    create_catalog_command: str = "create database ?1"
    drop_catalog_command: str = "drop database ?1"
    create_schema_command: str = "create schema ?1"
    drop_schema_command: str = "drop schema ?1"

    true_literal: str = "1"
    false_literal: str = "0"
    binary_literal_pattern: str = "X'?1'"
    extract_pattern: str = "extract(?1 from ?2)"
    extract_units: Tuple[Tuple[str, str], ...] = ()
    select_clause_null_string: str = "null"
    current_timestamp_select: Optional[str] = None
    select_guid: Optional[str] = None
    result_set_call_pattern: Optional[str] = None
    # the ref cursor is bound as an extra leading out parameter
    result_set_out_parameter: bool = False


@dataclass(frozen=True)
class DialectDefaults:
    sizes: SizeDefaults = field(default_factory=SizeDefaults)
    in_list_ceiling: int = 0
    max_alias_length: int = 10
    max_identifier_length: int = 0
    default_batch_size: int = 1


@dataclass(frozen=True, eq=False)
class Dialect:
    """
    Immutable per-backend aggregate consulted while SQL is assembled.

    Instances are safe to share across threads: every table is frozen when
    the builder publishes the dialect.
    """

    name: str
    capabilities: DialectCapabilities
    syntax: DialectSyntax
    defaults: DialectDefaults
    type_names: TypeNameTable
    language_types: LanguageTypeTable
    keywords: KeywordSet
    casts: CastMatrix
    functions: FunctionRegistry
    size_strategy: SizeStrategy
    unique_delegate: AlterTableUniqueDelegate
    locking: LockingStrategySelector
    batching: BatchLoadSizingStrategy
    version: Tuple[int, ...] = ()

    @property
    def param_style(self) -> str:
        return self.syntax.param_style

    # ------------------------------------------------------------------ #
    # type names
    # ------------------------------------------------------------------ #
    def resolve_type_name(self, code: TypeCode, size: Size | None = None) -> str:
        return self.type_names.resolve(code, size)

    def type_name(self, code: TypeCode, language_type: LanguageType | None = None) -> str:
        """
        Type name for ``code`` with the backend's default size applied.
        """
        return self.resolve_type_name(code, self.size_strategy.resolve(code, language_type))

    def raw_type_name(self, code: TypeCode) -> str:
        return self.type_names.raw(code)

    def cast_type_name(
        self,
        code: TypeCode,
        language_type: LanguageType | None = None,
        length: int | None = None,
        precision: int | None = None,
        scale: int | None = None,
    ) -> str:
        size = self.size_strategy.resolve(code, language_type, precision, scale, length)
        return self.resolve_type_name(code, size)

    def resolve_column_type(self, column: Column) -> str:
        if column.sql_type:
            return column.sql_type
        size = self.size_strategy.resolve(
            column.type_code, column.language_type, column.precision, column.scale, column.length
        )
        return check_resolved(column, self.resolve_type_name(column.type_code, size))

    def language_type_for(self, code: TypeCode, length: int | None = None) -> Optional[LanguageType]:
        return self.language_types.lookup(code, length)

    def equivalent_types(self, first: TypeCode, second: TypeCode) -> bool:
        return (
            first is second
            or (first.is_numeric_or_decimal and second.is_numeric_or_decimal)
            or (first.is_float_or_real_or_double and second.is_float_or_real_or_double)
        )

    # ------------------------------------------------------------------ #
    # identifiers
    # ------------------------------------------------------------------ #
    def is_keyword(self, word: str) -> bool:
        return self.keywords.is_keyword(word)

    def quote_identifier(self, identifier: str) -> str:
        close = self.syntax.close_quote
        escaped = identifier.replace(close, close * 2)
        return f"{self.syntax.open_quote}{escaped}{close}"

    def quote(self, name: str | None) -> str | None:
        """
        Names wrapped in back-ticks are re-quoted with this backend's quotes.
        """
        if name is None:
            return None
        if len(name) > 1 and name[0] == "`" and name[-1] == "`":
            return self.quote_identifier(name[1:-1])
        return name

    def quote_if_needed(self, name: str) -> str:
        quoted = self.quote(name)
        if quoted != name:
            return quoted
        return self.quote_identifier(name) if self.is_keyword(name) else name

    def format_table(self, table_name: str) -> str:
        return ".".join(self.quote_identifier(part) for part in table_name.split("."))

    def parameter_placeholder(self, position: int | None = None) -> str:
        style = self.syntax.param_style
        if style in ("format", "pyformat"):
            return "%s"
        if style == "numeric":
            return f":{position or 1}"
        return "?"

    # ------------------------------------------------------------------ #
    # literals and expressions
    # ------------------------------------------------------------------ #
    def to_boolean_literal(self, value: bool) -> str:
        return self.syntax.true_literal if value else self.syntax.false_literal

    def boolean_check_condition(self, column: str, encoding: CastType = CastType.INTEGER_BOOLEAN) -> str:
        if encoding is CastType.YN_BOOLEAN:
            return f"{column} in ('N','Y')"
        if encoding is CastType.TF_BOOLEAN:
            return f"{column} in ('F','T')"
        return f"{column} in (0,1)"

    def enum_check_condition(self, column: str, values: Type[Enum] | Sequence[str], *, ordinal: bool = False) -> str:
        names = [member.name for member in values] if isinstance(values, type) else list(values)
        if not names:
            raise ValueError(f"Check condition for '{column}' requires at least one value.")
        if ordinal:
            return f"{column} between 0 and {len(names) - 1}"
        return f"{column} in ({','.join(self._string_literal(name) for name in names)})"

    def inline_literal(self, value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return self.to_boolean_literal(value)
        if isinstance(value, (int, float, decimal.Decimal)):
            return str(value)
        if isinstance(value, (bytes, bytearray)):
            return self.binary_literal(bytes(value))
        if isinstance(value, datetime.datetime):
            return f"timestamp '{value.isoformat(sep=' ')}'"
        if isinstance(value, datetime.date):
            return f"date '{value.isoformat()}'"
        if isinstance(value, datetime.time):
            return f"time '{value.isoformat()}'"
        if isinstance(value, str):
            return self._string_literal(value)
        raise ValueError(f"Cannot render {type(value).__name__} as an inline literal.")

    def binary_literal(self, value: bytes) -> str:
        return self.syntax.binary_literal_pattern.replace("?1", value.hex())

    @staticmethod
    def _string_literal(value: str) -> str:
        escaped = value.replace("'", "''")
        return f"'{escaped}'"

    def escape_comment(self, comment: str) -> str:
        return comment.replace("'", "''")

    def add_sql_comment(self, sql: str, comment: str | None) -> str:
        if not comment:
            return sql
        cleaned = comment.replace("*/", "").replace("/*", "")
        return f"/* {cleaned} */ {sql}"

    def query_hint(self, sql: str, hints: Sequence[str]) -> str:
        if not hints:
            return sql
        style = self.syntax.query_hint_style
        joined = ", ".join(hints)
        if style is QueryHintStyle.INLINE_COMMENT:
            head, select, tail = sql.partition("select")
            if not select:
                return sql
            return f"{head}select /*+ {' '.join(hints)} */{tail}"
        if style is QueryHintStyle.OPTION:
            return f"{sql} option ({joined})"
        return sql

    def limit_clause(self, limit: int | None, offset: int | None) -> str:
        style = self.syntax.limit_style
        if limit is None and offset is None:
            return ""
        if style is LimitStyle.NONE:
            raise UnsupportedCapabilityError(self.name, "limit/offset")
        if style is LimitStyle.OFFSET_FETCH:
            parts = [f"offset {offset or 0} rows"]
            if limit is not None:
                parts.append(f"fetch next {limit} rows only")
            return " ".join(parts)
        parts = []
        if limit is not None:
            parts.append(f"limit {limit}")
        elif self.syntax.unbounded_limit is not None:
            parts.append(f"limit {self.syntax.unbounded_limit}")
        if offset is not None:
            parts.append(f"offset {offset}")
        return " ".join(parts)

    def render_column_definition(self, column: str, column_type: str, *, nullable: bool) -> str:
        null_clause = self.syntax.null_column_string if nullable else " not null"
        return f"{self.quote_identifier(column)} {column_type}{null_clause}"

    def trim_pattern(self, side: str = "both", character: bool = False) -> str:
        """
        Pattern trimming ``?1``, or the character ``?2`` when ``character`` is set.
        """
        side = side.lower()
        if side not in ("both", "leading", "trailing"):
            raise ValueError(f"Unknown trim side '{side}'")
        if self.syntax.trim_style is TrimStyle.FUNCTION:
            function = {"both": "trim", "leading": "ltrim", "trailing": "rtrim"}[side]
            return f"{function}(?1, ?2)" if character else f"{function}(?1)"
        if character:
            return f"trim({side} ?2 from ?1)"
        return f"trim({side} from ?1)"

    def extract_pattern(self, unit: str) -> str:
        units = dict(self.syntax.extract_units)
        return self.syntax.extract_pattern.replace("?1", units.get(unit.lower(), unit.lower()))

    def select_clause_null_string(self, code: TypeCode | None = None) -> str:
        pattern = self.syntax.select_clause_null_string
        if "?1" in pattern and code is not None:
            return pattern.replace("?1", self.raw_type_name(code))
        return pattern.replace("?1", "")

    def current_timestamp_select_string(self) -> str:
        if self.syntax.current_timestamp_select is None:
            raise UnsupportedCapabilityError(self.name, "current timestamp selection")
        return self.syntax.current_timestamp_select

    def select_guid_string(self) -> str:
        if self.syntax.select_guid is None:
            raise UnsupportedCapabilityError(self.name, "GUID selection")
        return self.syntax.select_guid

    def result_set_call_sql(self, procedure: str, arg_count: int = 0) -> str:
        """
        Callable statement returning a result set through a ref cursor, with
        binds in the dialect's parameter style.
        """
        if not self.capabilities.supports_ref_cursors or self.syntax.result_set_call_pattern is None:
            raise UnsupportedCapabilityError(self.name, "result-set returning callable statements")
        placeholders = arg_count + (1 if self.syntax.result_set_out_parameter else 0)
        args = ",".join(self.parameter_placeholder(position) for position in range(1, placeholders + 1))
        return self.syntax.result_set_call_pattern.replace("?1", procedure).replace("?2", args)

    def alter_table_string(self, table_name: str) -> str:
        statement = "alter table "
        if self.capabilities.supports_if_exists_after_alter_table:
            statement += "if exists "
        return statement + self.format_table(table_name)

    # ------------------------------------------------------------------ #
    # casts, functions, batching
    # ------------------------------------------------------------------ #
    def cast_pattern(self, from_type: CastType, to_type: CastType) -> str:
        return self.casts.pattern(from_type, to_type)

    def render_cast(self, from_type: CastType, to_type: CastType, operand: str, type_name: str) -> str:
        return self.casts.render(from_type, to_type, operand, type_name)

    def render_function(self, name: str, args: Sequence[str] = ()) -> str:
        return self.functions.render(name, args)

    def batch_size(self, key_column_count: int, key_count: int) -> int:
        return self.batching.size(key_column_count, key_count)

    def render_in_list(self, column: str, values: Sequence[Any], *, pad: bool = True):
        return render_in_list(
            column, values, self.parameter_placeholder, sizing=self.batching, pad=pad
        )

    # ------------------------------------------------------------------ #
    # locking
    # ------------------------------------------------------------------ #
    def locking_strategy(self, lock_mode: LockMode) -> LockingStrategy:
        return self.locking.strategy(lock_mode)

    def lock_statements(self, lock_mode: LockMode, lockable: Lockable, timeout_ms: int = WAIT_FOREVER):
        return self.locking.strategy(lock_mode).statements(self, lockable, timeout_ms)

    def for_update_fragment(
        self, lock_mode: LockMode, timeout_ms: int = WAIT_FOREVER, aliases: str | None = None
    ) -> str:
        return self.locking.for_update_fragment(lock_mode, timeout_ms, aliases)

    def for_update_fragment_for(self, options: LockOptions, aliases: str | None = None) -> str:
        return self.locking.for_update_fragment_for(options, aliases)

    def row_lock_strategy(self, lock_mode: LockMode) -> RowLockStrategy:
        return self.locking.row_lock_strategy(lock_mode)

    def append_lock_hint(self, options: LockOptions, table: str) -> str:
        return self.locking.append_lock_hint(options, table)

    def apply_locks_to_sql(self, sql: str, options: LockOptions, aliases: str | None = None) -> str:
        return sql + self.for_update_fragment_for(options, aliases)

    # ------------------------------------------------------------------ #
    # DDL
    # ------------------------------------------------------------------ #
    @property
    def schema_builder(self) -> SchemaBuilder:
        return SchemaBuilder(self)

    def ddl_for(self, table: Table) -> list[str]:
        return self.schema_builder.ddl_for(table)

    def sequence_next_value_sql(self, name: str) -> str:
        return self.schema_builder.sequences.next_value_sql(name)

    def sequence_next_value_fragment(self, name: str) -> str:
        return self.schema_builder.sequences.next_value_fragment(name)


def register_default_type_names(builder: TypeNameTableBuilder) -> None:
    builder.register(TypeCode.BIT, "bit")
    builder.register(TypeCode.BOOLEAN, "boolean")
    builder.register(TypeCode.TINYINT, "tinyint")
    builder.register(TypeCode.SMALLINT, "smallint")
    builder.register(TypeCode.INTEGER, "integer")
    builder.register(TypeCode.BIGINT, "bigint")
    builder.register(TypeCode.REAL, "real")
    builder.register(TypeCode.FLOAT, "float($p)")
    builder.register(TypeCode.DOUBLE, "double precision")
    builder.register(TypeCode.NUMERIC, "numeric($p,$s)")
    builder.register(TypeCode.DECIMAL, "decimal($p,$s)")
    builder.register(TypeCode.DATE, "date")
    builder.register(TypeCode.TIME, "time")
    builder.register(TypeCode.TIME_WITH_TIMEZONE, "time with time zone")
    builder.register(TypeCode.TIMESTAMP, "timestamp($p)")
    builder.register(TypeCode.TIMESTAMP_WITH_TIMEZONE, "timestamp($p) with time zone")
    builder.register(TypeCode.INTERVAL_SECOND, "interval second($p,$s)")
    builder.register(TypeCode.BINARY, "binary($l)")
    builder.register(TypeCode.VARBINARY, "varbinary($l)")
    builder.register(TypeCode.BLOB, "blob")
    builder.register(TypeCode.CHAR, "char($l)")
    builder.register(TypeCode.VARCHAR, "varchar($l)")
    builder.register(TypeCode.CLOB, "clob")
    builder.register(TypeCode.NCHAR, "nchar($l)")
    builder.register(TypeCode.NVARCHAR, "nvarchar($l)")
    builder.register(TypeCode.NCLOB, "nclob")


def register_default_language_types(builder: LanguageTypeTableBuilder) -> None:
    for code in TypeCode:
        builder.register(code, code.natural_language_type)
    builder.register(TypeCode.BIT, LanguageType.BOOLEAN, 1)
    builder.register(TypeCode.BIT, LanguageType.INTEGER, 8)
    builder.register(TypeCode.BIT, LanguageType.INTEGER, 16)
    builder.register(TypeCode.BIT, LanguageType.INTEGER, 32)
    builder.register(TypeCode.BIT, LanguageType.LONG, 64)
    builder.register(TypeCode.CHAR, LanguageType.CHARACTER, 1)
    builder.register(TypeCode.NCHAR, LanguageType.CHARACTER, 1)


class DialectBuilder:
    """
    Mutable accumulator for one backend's tables; ``build()`` freezes them.

    Defaults are registered on construction (type names first, then
    keywords, then the size strategy and unique delegate), so backend code
    only adds or replaces entries.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.type_names = TypeNameTableBuilder()
        register_default_type_names(self.type_names)
        self.keywords = KeywordSetBuilder()
        self.keywords.register_defaults()
        self.size_strategy_factory: Callable[[SizeDefaults], SizeStrategy] = DefaultSizeStrategy
        self.unique_delegate: AlterTableUniqueDelegate = AlterTableUniqueDelegate()

        self.language_types = LanguageTypeTableBuilder()
        register_default_language_types(self.language_types)
        self.functions = FunctionRegistryBuilder()
        register_standard_functions(self.functions)
        self.cast_overrides: Dict[Tuple[CastType, CastType], str] = {}
        self.capabilities = DialectCapabilities()
        self.syntax = DialectSyntax()
        self.defaults = DialectDefaults()
        self.lock_clauses = LockClauses()
        self.lock_hints: LockHintStrategy = NoLockHints()
        self.version: Tuple[int, ...] = ()

    def with_capabilities(self, **flags: bool) -> "DialectBuilder":
        self.capabilities = replace(self.capabilities, **flags)
        return self

    def with_syntax(self, **values: Any) -> "DialectBuilder":
        self.syntax = replace(self.syntax, **values)
        return self

    def with_defaults(self, **values: Any) -> "DialectBuilder":
        self.defaults = replace(self.defaults, **values)
        return self

    def with_sizes(self, **values: int) -> "DialectBuilder":
        return self.with_defaults(sizes=replace(self.defaults.sizes, **values))

    def with_lock_clauses(self, clauses: LockClauses, hints: LockHintStrategy | None = None) -> "DialectBuilder":
        self.lock_clauses = clauses
        if hints is not None:
            self.lock_hints = hints
        return self

    def override_cast(self, from_type: CastType, to_type: CastType, pattern: str) -> "DialectBuilder":
        self.cast_overrides[(from_type, to_type)] = pattern
        return self

    def apply_resolution_info(self, info: Any) -> "DialectBuilder":
        if info is None:
            return self
        self.keywords.register_reported(info.keywords)
        if info.in_list_ceiling:
            self.with_defaults(in_list_ceiling=info.in_list_ceiling)
        if info.version_tuple:
            self.version = info.version_tuple
        return self

    def apply_config(self, config: Any) -> "DialectBuilder":
        if config is None:
            return self
        if config.in_list_ceiling is not None:
            self.with_defaults(in_list_ceiling=config.in_list_ceiling)
        sizes: Dict[str, int] = {}
        if config.default_timestamp_precision is not None:
            sizes["timestamp_precision"] = config.default_timestamp_precision
        if config.default_decimal_precision is not None:
            sizes["decimal_precision"] = config.default_decimal_precision
        if config.default_lob_length is not None:
            sizes["lob_length"] = config.default_lob_length
        if sizes:
            self.with_sizes(**sizes)
        self.keywords.register_all(config.keywords)
        return self

    def build(self) -> Dialect:
        if not self.name:
            raise DialectConfigurationError("Dialect name must not be empty.")
        with time_call("dialect.build", logger, threshold_ms=50, dialect=self.name):
            clauses = self.lock_clauses
            capabilities = replace(
                self.capabilities,
                supports_no_wait=self.capabilities.supports_no_wait or clauses.supports_no_wait,
                supports_skip_locked=self.capabilities.supports_skip_locked or clauses.supports_skip_locked,
                supports_wait=self.capabilities.supports_wait or clauses.supports_wait,
            )
            dialect = Dialect(
                name=self.name,
                capabilities=capabilities,
                syntax=self.syntax,
                defaults=self.defaults,
                type_names=self.type_names.build(),
                language_types=self.language_types.build(),
                keywords=self.keywords.build(),
                casts=CastMatrix(self.cast_overrides),
                functions=self.functions.build(),
                size_strategy=self.size_strategy_factory(self.defaults.sizes),
                unique_delegate=self.unique_delegate,
                locking=LockingStrategySelector(clauses, self.lock_hints),
                batching=BatchLoadSizingStrategy(self.defaults.in_list_ceiling),
                version=self.version,
            )
        logger.info(
            "Built %s dialect with %d type mappings, %d keywords and %d functions",
            self.name,
            len(dialect.type_names),
            len(dialect.keywords),
            len(dialect.functions),
        )
        return dialect
