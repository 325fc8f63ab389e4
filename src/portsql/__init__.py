"""
portsql public package initialization.

Per-backend SQL dialects: type names, reserved words, casts, functions,
row locking, DDL generation and IN-list batch sizing.
"""

from .batching import BatchLoadSizingStrategy, determine_batch_size  # noqa: F401
from .casts import CastMatrix, CastType  # noqa: F401
from .config import DialectConfig  # noqa: F401
from .dialects import (  # noqa: F401
    Dialect,
    DialectBuilder,
    DialectCapabilities,
    get_dialect,
    resolve_dialect,
)
from .errors import (  # noqa: F401
    ConfigurationConflictError,
    DialectConfigurationError,
    DialectError,
    NoMappingError,
    UnsupportedCapabilityError,
)
from .locking import LockMode, LockOptions  # noqa: F401
from .resolution import DialectResolutionInfo  # noqa: F401
from .schema import Column, ForeignKey, Index, SchemaBuilder, Sequence, Table, UniqueKey  # noqa: F401
from .types import LanguageType, Size, TypeCode  # noqa: F401

__all__ = [
    "Dialect",
    "DialectBuilder",
    "DialectCapabilities",
    "DialectConfig",
    "DialectResolutionInfo",
    "get_dialect",
    "resolve_dialect",
    "TypeCode",
    "LanguageType",
    "Size",
    "CastType",
    "CastMatrix",
    "BatchLoadSizingStrategy",
    "determine_batch_size",
    "LockMode",
    "LockOptions",
    "SchemaBuilder",
    "Table",
    "Column",
    "Sequence",
    "Index",
    "ForeignKey",
    "UniqueKey",
    "DialectError",
    "NoMappingError",
    "UnsupportedCapabilityError",
    "ConfigurationConflictError",
    "DialectConfigurationError",
]
