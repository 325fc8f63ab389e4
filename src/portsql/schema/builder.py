"""
Schema builder converting table descriptors into DDL statements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..utils import get_logger
from .exporters import (
    ForeignKeyExporter,
    IndexExporter,
    NamespaceExporter,
    SequenceExporter,
    TableExporter,
    UniqueKeyExporter,
)
from .objects import ForeignKey, Index, Sequence, Table, UniqueKey

if TYPE_CHECKING:
    from ..dialects.base import Dialect


class SchemaBuilder:
    """
    Produces dialect-specific SQL for schema manipulation.
    """

    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect
        self.logger = get_logger("schema.builder")
        self.tables = TableExporter(dialect)
        self.sequences = SequenceExporter(dialect)
        self.indexes = IndexExporter(dialect)
        self.foreign_keys = ForeignKeyExporter(dialect)
        self.unique_keys = UniqueKeyExporter(dialect)
        self.namespaces = NamespaceExporter(dialect)

    def create_table_sql(self, table: Table) -> List[str]:
        return self.tables.create_sql(table)

    def drop_table_sql(self, table: Table) -> str:
        return self.tables.drop_sql(table)

    def create_sequence_sql(self, sequence: Sequence) -> List[str]:
        return self.sequences.create_sql(sequence)

    def drop_sequence_sql(self, sequence: Sequence) -> List[str]:
        return self.sequences.drop_sql(sequence)

    def create_index_sql(self, index: Index, table: Table) -> List[str]:
        return self.indexes.create_sql(index, table)

    def drop_index_sql(self, index: Index, table: Table) -> List[str]:
        return self.indexes.drop_sql(index, table)

    def create_foreign_key_sql(self, fk: ForeignKey, table: Table) -> List[str]:
        return self.foreign_keys.create_sql(fk, table)

    def drop_foreign_key_sql(self, fk: ForeignKey, table: Table) -> List[str]:
        return self.foreign_keys.drop_sql(fk, table)

    def create_unique_key_sql(self, unique_key: UniqueKey, table: Table) -> List[str]:
        return self.unique_keys.create_sql(unique_key, table)

    def drop_unique_key_sql(self, unique_key: UniqueKey, table: Table) -> List[str]:
        return self.unique_keys.drop_sql(unique_key, table)

    def create_catalog_sql(self, name: str) -> List[str]:
        return self.namespaces.create_catalog_sql(name)

    def drop_catalog_sql(self, name: str) -> List[str]:
        return self.namespaces.drop_catalog_sql(name)

    def create_schema_sql(self, name: str) -> List[str]:
        return self.namespaces.create_schema_sql(name)

    def drop_schema_sql(self, name: str) -> List[str]:
        return self.namespaces.drop_schema_sql(name)

    def ddl_for(self, table: Table) -> List[str]:
        """
        Every statement needed to create ``table``: the table itself, then its
        indexes, unique keys and (where the backend alters tables) foreign keys.
        """
        statements = self.create_table_sql(table)
        for index in table.indexes:
            statements.extend(self.create_index_sql(index, table))
        for unique_key in table.unique_keys:
            statements.extend(self.create_unique_key_sql(unique_key, table))
        if self.dialect.capabilities.has_alter_table:
            for fk in table.foreign_keys:
                statements.extend(self.create_foreign_key_sql(fk, table))
        self.logger.debug(
            "Generated %d DDL statements for %s", len(statements), table.qualified_name
        )
        return statements
