"""
Column size values and the strategy that fills in per-type defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Protocol

from .codes import LanguageType, TypeCode

JPA_DEFAULT_LENGTH = 255
LONG_LENGTH = 32_600
DEFAULT_LOB_LENGTH = 1_048_576


@dataclass(frozen=True)
class Size:
    """
    Partially populated length/precision/scale triple.
    """

    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None

    @classmethod
    def nil(cls) -> "Size":
        return cls()

    @classmethod
    def of_length(cls, length: int) -> "Size":
        return cls(length=length)

    @classmethod
    def of_precision(cls, precision: int, scale: Optional[int] = None) -> "Size":
        return cls(precision=precision, scale=scale)

    def is_empty(self) -> bool:
        return self.length is None and self.precision is None and self.scale is None

    def capacity(self) -> Optional[int]:
        """
        The measure compared against capacity ceilings: length, else precision.
        """
        return self.length if self.length is not None else self.precision


@dataclass(frozen=True)
class SizeDefaults:
    """
    Numeric defaults a dialect supplies to size resolution.
    """

    string_length: int = JPA_DEFAULT_LENGTH
    long_length: int = LONG_LENGTH
    lob_length: int = DEFAULT_LOB_LENGTH
    decimal_precision: int = 38
    decimal_scale: int = 2
    timestamp_precision: int = 6
    float_precision: int = 24
    double_precision: int = 53


class SizeStrategy(Protocol):
    """
    Computes the default size of a column for a type code and language type.
    """

    def resolve(
        self,
        code: TypeCode,
        language_type: LanguageType | None = None,
        precision: int | None = None,
        scale: int | None = None,
        length: int | None = None,
    ) -> Size: ...


@dataclass(frozen=True)
class DefaultSizeStrategy:
    """
    Per-code size rules shared by every dialect; dialects vary the numbers.
    """

    defaults: SizeDefaults = field(default_factory=SizeDefaults)

    def resolve(
        self,
        code: TypeCode,
        language_type: LanguageType | None = None,
        precision: int | None = None,
        scale: int | None = None,
        length: int | None = None,
    ) -> Size:
        language = language_type or code.natural_language_type
        defaults = self.defaults
        size = Size()

        if code is TypeCode.BIT or code is TypeCode.BOOLEAN:
            if language is LanguageType.BOOLEAN and length == JPA_DEFAULT_LENGTH:
                length = None
            size = replace(size, length=language.default_length(code, defaults))
        elif code in (TypeCode.CHAR, TypeCode.NCHAR):
            if length == JPA_DEFAULT_LENGTH and language in (
                LanguageType.CHARACTER,
                LanguageType.UUID,
            ):
                length = None
            size = replace(size, length=language.default_length(code, defaults))
        elif code in (TypeCode.VARCHAR, TypeCode.NVARCHAR, TypeCode.BINARY, TypeCode.VARBINARY):
            if language is LanguageType.UUID and length == JPA_DEFAULT_LENGTH:
                length = None
            size = replace(size, length=language.default_length(code, defaults))
        elif code in (TypeCode.LONGVARCHAR, TypeCode.LONGNVARCHAR, TypeCode.LONGVARBINARY):
            size = replace(size, length=defaults.long_length)
        elif code.is_float_or_real_or_double or code.is_timestamp:
            if code.is_float_or_real_or_double and precision is not None and scale is not None:
                # decimal digits given; FLOAT takes binary digits
                scale = None
                precision = math.ceil(precision * math.log(10))
            size = replace(size, precision=language.default_precision(code, defaults))
        elif code.is_numeric_or_decimal or code is TypeCode.INTERVAL_SECOND:
            size = replace(
                size,
                precision=language.default_precision(code, defaults),
                scale=language.default_scale(code, defaults),
            )
        elif code.is_lob:
            size = replace(size, length=defaults.lob_length)

        if precision is not None:
            size = replace(size, precision=precision)
        if scale is not None:
            size = replace(size, scale=scale)
        if length is not None:
            size = replace(size, length=length)
        return size
