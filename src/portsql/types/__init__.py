"""
Type codes, sizes and type-name tables.
"""

from .codes import LanguageType, TypeCode
from .names import (
    FALLBACK_CODES,
    LanguageTypeTable,
    LanguageTypeTableBuilder,
    TypeNameEntry,
    TypeNameTable,
    TypeNameTableBuilder,
    substitute,
    unresolved_placeholders,
)
from .size import DefaultSizeStrategy, Size, SizeDefaults, SizeStrategy

__all__ = [
    "TypeCode",
    "LanguageType",
    "Size",
    "SizeDefaults",
    "SizeStrategy",
    "DefaultSizeStrategy",
    "TypeNameEntry",
    "TypeNameTable",
    "TypeNameTableBuilder",
    "LanguageTypeTable",
    "LanguageTypeTableBuilder",
    "FALLBACK_CODES",
    "substitute",
    "unresolved_placeholders",
]
