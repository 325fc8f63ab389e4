"""
Portable SQL type codes and the host-language value families mapped onto them.
"""

from __future__ import annotations

import datetime
import decimal
import uuid
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .size import SizeDefaults


class TypeCode(Enum):
    """
    Backend-independent identifier for a SQL type.
    """

    BIT = "bit"
    BOOLEAN = "boolean"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    REAL = "real"
    FLOAT = "float"
    DOUBLE = "double"
    NUMERIC = "numeric"
    DECIMAL = "decimal"
    DATE = "date"
    TIME = "time"
    TIME_WITH_TIMEZONE = "time_with_timezone"
    TIMESTAMP = "timestamp"
    TIMESTAMP_WITH_TIMEZONE = "timestamp_with_timezone"
    INTERVAL_SECOND = "interval_second"
    BINARY = "binary"
    VARBINARY = "varbinary"
    LONGVARBINARY = "longvarbinary"
    BLOB = "blob"
    CHAR = "char"
    VARCHAR = "varchar"
    LONGVARCHAR = "longvarchar"
    CLOB = "clob"
    NCHAR = "nchar"
    NVARCHAR = "nvarchar"
    LONGNVARCHAR = "longnvarchar"
    NCLOB = "nclob"

    @property
    def is_numeric(self) -> bool:
        return self in _NUMERIC

    @property
    def is_character(self) -> bool:
        return self in _CHARACTER

    @property
    def is_binary(self) -> bool:
        return self in _BINARY

    @property
    def is_lob(self) -> bool:
        return self in (TypeCode.BLOB, TypeCode.CLOB, TypeCode.NCLOB)

    @property
    def is_numeric_or_decimal(self) -> bool:
        return self in (TypeCode.NUMERIC, TypeCode.DECIMAL)

    @property
    def is_float_or_real_or_double(self) -> bool:
        return self in (TypeCode.FLOAT, TypeCode.REAL, TypeCode.DOUBLE)

    @property
    def is_timestamp(self) -> bool:
        return self in (TypeCode.TIMESTAMP, TypeCode.TIMESTAMP_WITH_TIMEZONE)

    @property
    def natural_language_type(self) -> "LanguageType":
        return _NATURAL_LANGUAGE_TYPES[self]


_NUMERIC = frozenset(
    {
        TypeCode.BIT,
        TypeCode.TINYINT,
        TypeCode.SMALLINT,
        TypeCode.INTEGER,
        TypeCode.BIGINT,
        TypeCode.DOUBLE,
        TypeCode.REAL,
        TypeCode.FLOAT,
        TypeCode.NUMERIC,
        TypeCode.DECIMAL,
    }
)

_CHARACTER = frozenset(
    {
        TypeCode.CHAR,
        TypeCode.VARCHAR,
        TypeCode.LONGVARCHAR,
        TypeCode.NCHAR,
        TypeCode.NVARCHAR,
        TypeCode.LONGNVARCHAR,
    }
)

_BINARY = frozenset({TypeCode.BINARY, TypeCode.VARBINARY, TypeCode.LONGVARBINARY})


class LanguageType(Enum):
    """
    Value family of the attribute being mapped, used to pick natural sizes.
    """

    BOOLEAN = "boolean"
    CHARACTER = "character"
    STRING = "string"
    UUID = "uuid"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BIG_INTEGER = "big_integer"
    BYTES = "bytes"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    DURATION = "duration"

    @classmethod
    def of(cls, python_type: Any) -> "LanguageType":
        """
        Map a Python type (or an existing member) to its value family.
        """
        if isinstance(python_type, LanguageType):
            return python_type
        for candidate, member in _PYTHON_TYPES:
            if isinstance(python_type, type) and issubclass(python_type, candidate):
                return member
        raise ValueError(f"No language type registered for {python_type!r}")

    def default_length(self, code: TypeCode, defaults: "SizeDefaults") -> int:
        if self in (LanguageType.BOOLEAN, LanguageType.CHARACTER):
            return 1
        if self is LanguageType.UUID:
            return 16 if code.is_binary else 36
        if code.is_lob:
            return defaults.lob_length
        return defaults.string_length

    def default_precision(self, code: TypeCode, defaults: "SizeDefaults") -> int:
        if self is LanguageType.INTEGER:
            return 10
        if self is LanguageType.LONG:
            return 19
        if self is LanguageType.DURATION:
            return 18
        if self is LanguageType.FLOAT:
            return defaults.float_precision
        if self is LanguageType.DOUBLE:
            return defaults.double_precision
        if code.is_timestamp or self in (LanguageType.TIMESTAMP, LanguageType.TIME):
            return defaults.timestamp_precision
        if code.is_float_or_real_or_double:
            return defaults.double_precision
        return defaults.decimal_precision

    def default_scale(self, code: TypeCode, defaults: "SizeDefaults") -> int:
        if self is LanguageType.DECIMAL:
            return defaults.decimal_scale
        if self is LanguageType.DURATION:
            return 9
        return 0


# bool must precede int because bool subclasses int; datetime precedes date.
_PYTHON_TYPES: tuple[tuple[type, LanguageType], ...] = (
    (bool, LanguageType.BOOLEAN),
    (int, LanguageType.LONG),
    (float, LanguageType.DOUBLE),
    (decimal.Decimal, LanguageType.DECIMAL),
    (str, LanguageType.STRING),
    (uuid.UUID, LanguageType.UUID),
    (bytes, LanguageType.BYTES),
    (bytearray, LanguageType.BYTES),
    (datetime.datetime, LanguageType.TIMESTAMP),
    (datetime.date, LanguageType.DATE),
    (datetime.time, LanguageType.TIME),
    (datetime.timedelta, LanguageType.DURATION),
)

_NATURAL_LANGUAGE_TYPES: dict[TypeCode, LanguageType] = {
    TypeCode.BIT: LanguageType.BOOLEAN,
    TypeCode.BOOLEAN: LanguageType.BOOLEAN,
    TypeCode.TINYINT: LanguageType.INTEGER,
    TypeCode.SMALLINT: LanguageType.INTEGER,
    TypeCode.INTEGER: LanguageType.INTEGER,
    TypeCode.BIGINT: LanguageType.LONG,
    TypeCode.REAL: LanguageType.FLOAT,
    TypeCode.FLOAT: LanguageType.DOUBLE,
    TypeCode.DOUBLE: LanguageType.DOUBLE,
    TypeCode.NUMERIC: LanguageType.DECIMAL,
    TypeCode.DECIMAL: LanguageType.DECIMAL,
    TypeCode.DATE: LanguageType.DATE,
    TypeCode.TIME: LanguageType.TIME,
    TypeCode.TIME_WITH_TIMEZONE: LanguageType.TIME,
    TypeCode.TIMESTAMP: LanguageType.TIMESTAMP,
    TypeCode.TIMESTAMP_WITH_TIMEZONE: LanguageType.TIMESTAMP,
    TypeCode.INTERVAL_SECOND: LanguageType.DURATION,
    TypeCode.BINARY: LanguageType.BYTES,
    TypeCode.VARBINARY: LanguageType.BYTES,
    TypeCode.LONGVARBINARY: LanguageType.BYTES,
    TypeCode.BLOB: LanguageType.BYTES,
    TypeCode.CHAR: LanguageType.STRING,
    TypeCode.VARCHAR: LanguageType.STRING,
    TypeCode.LONGVARCHAR: LanguageType.STRING,
    TypeCode.CLOB: LanguageType.STRING,
    TypeCode.NCHAR: LanguageType.STRING,
    TypeCode.NVARCHAR: LanguageType.STRING,
    TypeCode.LONGNVARCHAR: LanguageType.STRING,
    TypeCode.NCLOB: LanguageType.STRING,
}
