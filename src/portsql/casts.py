"""
Emulation patterns for casts between value representations a backend cannot
convert natively, most notably the various encodings of booleans.

The table is keyed by ``(from, to)``; pairs that are absent use the generic
``cast(?1 as ?2)`` pattern. ``?1`` is the operand and ``?2`` the target type.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .utils.patterns import render_pattern


class CastType(Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    LONG = "long"
    INTEGER_BOOLEAN = "integer_boolean"
    YN_BOOLEAN = "yn_boolean"
    TF_BOOLEAN = "tf_boolean"
    OTHER = "other"


GENERIC_CAST = "cast(?1 as ?2)"

CastKey = Tuple[CastType, CastType]

_S = CastType.STRING
_B = CastType.BOOLEAN
_I = CastType.INTEGER
_L = CastType.LONG
_IB = CastType.INTEGER_BOOLEAN
_YN = CastType.YN_BOOLEAN
_TF = CastType.TF_BOOLEAN

STANDARD_CAST_PATTERNS: Mapping[CastKey, str] = MappingProxyType(
    {
        # to STRING
        (_IB, _S): "case ?1 when 1 then 'true' when 0 then 'false' else null end",
        (_YN, _S): "case ?1 when 'Y' then 'true' when 'N' then 'false' else null end",
        (_TF, _S): "case ?1 when 'T' then 'true' when 'F' then 'false' else null end",
        # to INTEGER / LONG
        (_YN, _I): "case ?1 when 'Y' then 1 when 'N' then 0 else null end",
        (_TF, _I): "case ?1 when 'T' then 1 when 'F' then 0 else null end",
        (_B, _I): "case ?1 when true then 1 when false then 0 else null end",
        (_YN, _L): "case ?1 when 'Y' then 1 when 'N' then 0 else null end",
        (_TF, _L): "case ?1 when 'T' then 1 when 'F' then 0 else null end",
        (_B, _L): "case ?1 when true then 1 when false then 0 else null end",
        # to INTEGER_BOOLEAN
        (_S, _IB): "case ?1 when 'T' then 1 when 'Y' then 1 when 'F' then 0 when 'N' then 0 else null end",
        (_I, _IB): "abs(sign(?1))",
        (_L, _IB): "abs(sign(?1))",
        (_YN, _IB): "case ?1 when 'Y' then 1 when 'N' then 0 else null end",
        (_TF, _IB): "case ?1 when 'T' then 1 when 'F' then 0 else null end",
        (_B, _IB): "case ?1 when true then 1 when false then 0 else null end",
        # to YN_BOOLEAN
        (_S, _YN): "case ?1 when 'T' then 'Y' when 'Y' then 'Y' when 'F' then 'N' when 'N' then 'N' else null end",
        (_IB, _YN): "case ?1 when 1 then 'Y' when 0 then 'N' else null end",
        (_I, _YN): "case abs(sign(?1)) when 1 then 'Y' when 0 then 'N' else null end",
        (_L, _YN): "case abs(sign(?1)) when 1 then 'Y' when 0 then 'N' else null end",
        (_TF, _YN): "case ?1 when 'T' then 'Y' when 'F' then 'N' else null end",
        (_B, _YN): "case ?1 when true then 'Y' when false then 'N' else null end",
        # to TF_BOOLEAN
        (_S, _TF): "case ?1 when 'T' then 'T' when 'Y' then 'T' when 'F' then 'F' when 'N' then 'F' else null end",
        (_IB, _TF): "case ?1 when 1 then 'T' when 0 then 'F' else null end",
        (_I, _TF): "case abs(sign(?1)) when 1 then 'T' when 0 then 'F' else null end",
        (_L, _TF): "case abs(sign(?1)) when 1 then 'T' when 0 then 'F' else null end",
        (_YN, _TF): "case ?1 when 'Y' then 'T' when 'N' then 'F' else null end",
        (_B, _TF): "case ?1 when true then 'T' when false then 'F' else null end",
        # to BOOLEAN
        (_S, _B): "case ?1 when 'T' then true when 'Y' then true when 'F' then false when 'N' then false else null end",
        (_IB, _B): "(?1<>0)",
        (_I, _B): "(?1<>0)",
        (_L, _B): "(?1<>0)",
        (_YN, _B): "(?1<>'N')",
        (_TF, _B): "(?1<>'F')",
    }
)


class CastMatrix:
    """
    Immutable (from, to) -> pattern lookup.
    """

    def __init__(self, overrides: Optional[Mapping[CastKey, str]] = None) -> None:
        patterns: Dict[CastKey, str] = dict(STANDARD_CAST_PATTERNS)
        if overrides:
            patterns.update(overrides)
        self._patterns = MappingProxyType(patterns)

    def pattern(self, from_type: CastType, to_type: CastType) -> str:
        return self._patterns.get((from_type, to_type), GENERIC_CAST)

    def is_emulated(self, from_type: CastType, to_type: CastType) -> bool:
        return (from_type, to_type) in self._patterns

    def render(self, from_type: CastType, to_type: CastType, operand: str, type_name: str) -> str:
        return render_pattern(self.pattern(from_type, to_type), [operand, type_name])

    def __len__(self) -> int:
        return len(self._patterns)
