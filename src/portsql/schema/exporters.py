"""
Stateless DDL generators for tables, sequences, indexes and constraints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence as SequenceType

from ..errors import ConfigurationConflictError, NoMappingError, UnsupportedCapabilityError
from ..types import unresolved_placeholders
from ..utils import get_logger, render_pattern
from .objects import Column, ForeignKey, Index, Sequence, Table, UniqueKey

if TYPE_CHECKING:
    from ..dialects.base import Dialect

logger = get_logger("schema.exporters")


def _check_exclusive(dialect: "Dialect", first: str, second: str) -> None:
    capabilities = dialect.capabilities
    if getattr(capabilities, first) and getattr(capabilities, second):
        raise ConfigurationConflictError(dialect.name, (first, second))


def _column_list(dialect: "Dialect", columns: SequenceType[str]) -> str:
    return ", ".join(dialect.quote_identifier(column) for column in columns)


def _constraint_name(dialect: "Dialect", name: str) -> str:
    return dialect.quote_identifier(name)


class TableExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def create_sql(self, table: Table) -> List[str]:
        dialect = self.dialect
        syntax = dialect.syntax
        table_name = dialect.format_table(table.qualified_name)
        pieces = [self.column_definition(table, column) for column in table.columns]
        if table.primary_key:
            pieces.append(f"primary key ({_column_list(dialect, table.primary_key)})")
        pieces.extend(dialect.unique_delegate.table_fragments(dialect, table))
        for check in table.checks:
            if not dialect.capabilities.supports_table_check:
                raise UnsupportedCapabilityError(dialect.name, "table check constraints")
            pieces.append(f"check ({check})")
        if not dialect.capabilities.has_alter_table:
            pieces.extend(self._inline_foreign_key(fk) for fk in table.foreign_keys)

        statement = f"{syntax.create_table_string} {table_name} ({', '.join(pieces)}){syntax.table_type_string}"
        if table.comment and syntax.table_comment_pattern:
            statement += render_pattern(syntax.table_comment_pattern, [dialect.escape_comment(table.comment)])
        statements = [statement]
        if dialect.capabilities.supports_comment_on:
            statements.extend(self._comment_statements(table, table_name))
        return statements

    def column_definition(self, table: Table, column: Column) -> str:
        dialect = self.dialect
        syntax = dialect.syntax
        capabilities = dialect.capabilities
        type_name = dialect.resolve_column_type(column)
        definition = dialect.quote_identifier(column.name)

        if column.identity:
            if not capabilities.supports_identity_columns:
                raise UnsupportedCapabilityError(dialect.name, "identity columns")
            if capabilities.has_data_type_in_identity_column:
                definition += f" {type_name}"
            definition += syntax.identity_column_string
        else:
            definition += f" {type_name}"
            if column.default is not None:
                definition += f" default {column.default}"
            if column.nullable and column.name not in table.primary_key:
                definition += syntax.null_column_string
            else:
                definition += " not null"

        if column.unique and column.name not in table.primary_key:
            definition += dialect.unique_delegate.column_fragment()
        if column.check:
            if not capabilities.supports_column_check:
                raise UnsupportedCapabilityError(dialect.name, "column check constraints")
            definition += f" check ({column.check})"
        if column.comment and syntax.column_comment_pattern:
            definition += render_pattern(syntax.column_comment_pattern, [dialect.escape_comment(column.comment)])
        return definition

    def drop_sql(self, table: Table) -> str:
        dialect = self.dialect
        _check_exclusive(
            dialect, "supports_if_exists_before_table_name", "supports_if_exists_after_table_name"
        )
        table_name = dialect.format_table(table.qualified_name)
        logger.warning(
            "DROP TABLE generated for %s; confirm destructive migration before applying.",
            table_name,
        )
        statement = "drop table "
        if dialect.capabilities.supports_if_exists_before_table_name:
            statement += "if exists "
        statement += table_name + dialect.syntax.cascade_constraints_string
        if dialect.capabilities.supports_if_exists_after_table_name:
            statement += " if exists"
        return statement

    def _inline_foreign_key(self, fk: ForeignKey) -> str:
        dialect = self.dialect
        fragment = (
            f"foreign key ({_column_list(dialect, fk.columns)}) "
            f"references {dialect.format_table(fk.referenced_table)}"
        )
        if not fk.references_primary_key:
            fragment += f" ({_column_list(dialect, fk.referenced_columns)})"
        if fk.cascade_delete:
            fragment += ForeignKeyExporter(dialect).cascade_fragment()
        return fragment

    def _comment_statements(self, table: Table, table_name: str) -> List[str]:
        dialect = self.dialect
        statements: List[str] = []
        if table.comment:
            statements.append(f"comment on table {table_name} is '{dialect.escape_comment(table.comment)}'")
        for column in table.columns:
            if column.comment:
                column_name = dialect.quote_identifier(column.name)
                statements.append(
                    f"comment on column {table_name}.{column_name} is '{dialect.escape_comment(column.comment)}'"
                )
        return statements


class SequenceExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def _require_sequences(self) -> None:
        if not self.dialect.capabilities.supports_sequences:
            raise UnsupportedCapabilityError(self.dialect.name, "sequences")

    def create_sql(self, sequence: Sequence) -> List[str]:
        self._require_sequences()
        name = self.dialect.format_table(sequence.qualified_name)
        statement = f"{self.dialect.syntax.create_sequence_string}{name}"
        statement += f" start with {sequence.start} increment by {sequence.increment}"
        return [statement]

    def drop_sql(self, sequence: Sequence) -> List[str]:
        self._require_sequences()
        name = self.dialect.format_table(sequence.qualified_name)
        return [f"{self.dialect.syntax.drop_sequence_string}{name}"]

    def next_value_sql(self, name: str) -> str:
        self._require_sequences()
        return render_pattern(self.dialect.syntax.sequence_next_value_select, [self.dialect.format_table(name)])

    def next_value_fragment(self, name: str) -> str:
        self._require_sequences()
        return render_pattern(self.dialect.syntax.sequence_next_value, [self.dialect.format_table(name)])


class IndexExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def index_name(self, index: Index, table: Table) -> str:
        if self.dialect.capabilities.qualify_index_name:
            qualified = ".".join(part for part in (table.catalog, table.schema, index.name) if part)
            return self.dialect.format_table(qualified)
        return self.dialect.quote_identifier(index.name)

    def create_sql(self, index: Index, table: Table) -> List[str]:
        if not index.columns:
            raise ValueError(f"Index '{index.name}' requires at least one column.")
        dialect = self.dialect
        kind = "create unique index" if index.unique else "create index"
        return [
            f"{kind} {self.index_name(index, table)} on {dialect.format_table(table.qualified_name)} "
            f"({_column_list(dialect, index.columns)})"
        ]

    def drop_sql(self, index: Index, table: Table) -> List[str]:
        statement = f"drop index {self.index_name(index, table)}"
        if self.dialect.capabilities.drop_index_requires_table:
            statement += f" on {self.dialect.format_table(table.qualified_name)}"
        return [statement]


class ForeignKeyExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def _require_alter_table(self) -> None:
        if not self.dialect.capabilities.has_alter_table:
            raise UnsupportedCapabilityError(self.dialect.name, "adding foreign keys with alter table")

    def cascade_fragment(self) -> str:
        if not self.dialect.capabilities.supports_cascade_delete:
            raise UnsupportedCapabilityError(self.dialect.name, "on delete cascade")
        return " on delete cascade"

    def create_sql(self, fk: ForeignKey, table: Table) -> List[str]:
        self._require_alter_table()
        dialect = self.dialect
        statement = (
            f"{dialect.alter_table_string(table.qualified_name)} add constraint {_constraint_name(dialect, fk.name)} "
            f"foreign key ({_column_list(dialect, fk.columns)}) "
            f"references {dialect.format_table(fk.referenced_table)}"
        )
        if not fk.references_primary_key:
            statement += f" ({_column_list(dialect, fk.referenced_columns)})"
        if fk.cascade_delete:
            statement += self.cascade_fragment()
        return [statement]

    def drop_sql(self, fk: ForeignKey, table: Table) -> List[str]:
        self._require_alter_table()
        dialect = self.dialect
        _check_exclusive(
            dialect,
            "supports_if_exists_before_constraint_name",
            "supports_if_exists_after_constraint_name",
        )
        statement = dialect.alter_table_string(table.qualified_name) + dialect.syntax.drop_foreign_key_string
        if dialect.capabilities.supports_if_exists_before_constraint_name:
            statement += "if exists "
        statement += _constraint_name(dialect, fk.name)
        if dialect.capabilities.supports_if_exists_after_constraint_name:
            statement += " if exists"
        return [statement]


class AlterTableUniqueDelegate:
    """
    Unique keys added and dropped with separate ``alter table`` statements.
    """

    def column_fragment(self) -> str:
        return " unique"

    def table_fragments(self, dialect: "Dialect", table: Table) -> List[str]:
        return []

    def create_sql(self, dialect: "Dialect", unique_key: UniqueKey, table: Table) -> List[str]:
        return [
            f"{dialect.alter_table_string(table.qualified_name)} add constraint "
            f"{_constraint_name(dialect, unique_key.name)} unique ({_column_list(dialect, unique_key.columns)})"
        ]

    def drop_sql(self, dialect: "Dialect", unique_key: UniqueKey, table: Table) -> List[str]:
        _check_exclusive(
            dialect,
            "supports_if_exists_before_constraint_name",
            "supports_if_exists_after_constraint_name",
        )
        statement = f"{dialect.alter_table_string(table.qualified_name)} {dialect.syntax.drop_unique_key_string} "
        if dialect.capabilities.supports_if_exists_before_constraint_name:
            statement += "if exists "
        statement += _constraint_name(dialect, unique_key.name)
        if dialect.capabilities.supports_if_exists_after_constraint_name:
            statement += " if exists"
        return [statement]


class CreateTableUniqueDelegate(AlterTableUniqueDelegate):
    """
    Unique keys declared inside ``create table``; they live and die with the table.
    """

    def table_fragments(self, dialect: "Dialect", table: Table) -> List[str]:
        return [
            f"constraint {_constraint_name(dialect, key.name)} unique ({_column_list(dialect, key.columns)})"
            for key in table.unique_keys
        ]

    def create_sql(self, dialect: "Dialect", unique_key: UniqueKey, table: Table) -> List[str]:
        return []

    def drop_sql(self, dialect: "Dialect", unique_key: UniqueKey, table: Table) -> List[str]:
        return []


class UniqueKeyExporter:
    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def create_sql(self, unique_key: UniqueKey, table: Table) -> List[str]:
        if not unique_key.columns:
            raise ValueError(f"Unique key '{unique_key.name}' requires at least one column.")
        return self.dialect.unique_delegate.create_sql(self.dialect, unique_key, table)

    def drop_sql(self, unique_key: UniqueKey, table: Table) -> List[str]:
        return self.dialect.unique_delegate.drop_sql(self.dialect, unique_key, table)


class NamespaceExporter:
    """
    Catalog and schema create/drop commands.
    """

    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def create_catalog_sql(self, name: str) -> List[str]:
        return [self._catalog_command(self.dialect.syntax.create_catalog_command, name)]

    def drop_catalog_sql(self, name: str) -> List[str]:
        return [self._catalog_command(self.dialect.syntax.drop_catalog_command, name)]

    def create_schema_sql(self, name: str) -> List[str]:
        return [self._schema_command(self.dialect.syntax.create_schema_command, name)]

    def drop_schema_sql(self, name: str) -> List[str]:
        return [self._schema_command(self.dialect.syntax.drop_schema_command, name)]

    def _catalog_command(self, pattern: str, name: str) -> str:
        if not self.dialect.capabilities.can_create_catalog:
            raise UnsupportedCapabilityError(self.dialect.name, "catalog creation")
        return render_pattern(pattern, [self.dialect.quote_identifier(name)])

    def _schema_command(self, pattern: str, name: str) -> str:
        if not self.dialect.capabilities.can_create_schema:
            raise UnsupportedCapabilityError(self.dialect.name, "schema creation")
        return render_pattern(pattern, [self.dialect.quote_identifier(name)])


def check_resolved(column: Column, type_name: str) -> str:
    missing = unresolved_placeholders(type_name)
    if missing:
        raise NoMappingError(
            f"Type name '{type_name}' for column '{column.name}' leaves {', '.join(missing)} unresolved",
            code=column.type_code,
        )
    return type_name
