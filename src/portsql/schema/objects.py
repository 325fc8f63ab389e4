"""
Structural descriptors consumed by the DDL exporters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..types import LanguageType, TypeCode


@dataclass(frozen=True)
class Column:
    name: str
    type_code: TypeCode
    language_type: Optional[LanguageType] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    nullable: bool = True
    unique: bool = False
    identity: bool = False
    default: Optional[str] = None
    check: Optional[str] = None
    comment: Optional[str] = None
    sql_type: Optional[str] = None


@dataclass(frozen=True)
class UniqueKey:
    name: str
    columns: Tuple[str, ...]


@dataclass(frozen=True)
class Index:
    name: str
    columns: Tuple[str, ...]
    unique: bool = False


@dataclass(frozen=True)
class ForeignKey:
    name: str
    columns: Tuple[str, ...]
    referenced_table: str
    referenced_columns: Tuple[str, ...] = ()
    cascade_delete: bool = False

    @property
    def references_primary_key(self) -> bool:
        return not self.referenced_columns


@dataclass(frozen=True)
class Sequence:
    name: str
    start: int = 1
    increment: int = 1
    schema: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}" if self.schema else self.name


@dataclass(frozen=True)
class Table:
    """
    A table and everything created alongside it.
    """

    name: str
    columns: Tuple[Column, ...] = ()
    primary_key: Tuple[str, ...] = ()
    schema: Optional[str] = None
    catalog: Optional[str] = None
    unique_keys: Tuple[UniqueKey, ...] = ()
    indexes: Tuple[Index, ...] = ()
    foreign_keys: Tuple[ForeignKey, ...] = ()
    checks: Tuple[str, ...] = ()
    comment: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return ".".join(part for part in (self.catalog, self.schema, self.name) if part)

    def column(self, name: str) -> Column:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(f"Table '{self.name}' has no column '{name}'")
