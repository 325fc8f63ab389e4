"""
Schema descriptors and DDL generation.
"""

from .builder import SchemaBuilder
from .exporters import (
    AlterTableUniqueDelegate,
    CreateTableUniqueDelegate,
    ForeignKeyExporter,
    IndexExporter,
    NamespaceExporter,
    SequenceExporter,
    TableExporter,
    UniqueKeyExporter,
)
from .objects import Column, ForeignKey, Index, Sequence, Table, UniqueKey

__all__ = [
    "SchemaBuilder",
    "Column",
    "Table",
    "Sequence",
    "Index",
    "ForeignKey",
    "UniqueKey",
    "TableExporter",
    "SequenceExporter",
    "IndexExporter",
    "ForeignKeyExporter",
    "UniqueKeyExporter",
    "NamespaceExporter",
    "AlterTableUniqueDelegate",
    "CreateTableUniqueDelegate",
]
