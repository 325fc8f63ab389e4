"""
Capacity-keyed lookup tables mapping type codes to native type names.

Tables are accumulated in a mutable builder while a dialect is being set up
and frozen into an immutable value before the dialect is published.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Generic, Iterator, List, Mapping, Optional, Tuple, TypeVar

from ..errors import NoMappingError
from .codes import LanguageType, TypeCode
from .size import Size

T = TypeVar("T")

# Codes that borrow another code's mapping when they have none of their own.
FALLBACK_CODES: Mapping[TypeCode, TypeCode] = MappingProxyType(
    {
        TypeCode.LONGVARCHAR: TypeCode.VARCHAR,
        TypeCode.LONGNVARCHAR: TypeCode.NVARCHAR,
        TypeCode.LONGVARBINARY: TypeCode.VARBINARY,
    }
)


@dataclass(frozen=True)
class TypeNameEntry:
    code: TypeCode
    capacity: Optional[int]
    pattern: str


class CapacityTable(Generic[T]):
    """
    Immutable (code, capacity ceiling) -> value table with nearest-ceiling lookup.
    """

    def __init__(
        self,
        weighted: Mapping[TypeCode, Tuple[Tuple[int, T], ...]],
        defaults: Mapping[TypeCode, T],
    ) -> None:
        self._weighted = MappingProxyType(dict(weighted))
        self._defaults = MappingProxyType(dict(defaults))

    def lookup(self, code: TypeCode, capacity: Optional[int] = None) -> Optional[T]:
        if capacity is not None:
            for ceiling, value in self._weighted.get(code, ()):
                if capacity <= ceiling:
                    return value
        return self._defaults.get(code)

    def default(self, code: TypeCode) -> Optional[T]:
        return self._defaults.get(code)

    def codes(self) -> frozenset[TypeCode]:
        return frozenset(self._weighted) | frozenset(self._defaults)

    def values(self) -> Iterator[T]:
        for entries in self._weighted.values():
            for _, value in entries:
                yield value
        yield from self._defaults.values()

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._weighted.values()) + len(self._defaults)


class CapacityTableBuilder(Generic[T]):
    def __init__(self) -> None:
        self._weighted: Dict[TypeCode, Dict[int, T]] = {}
        self._defaults: Dict[TypeCode, T] = {}

    def put(self, code: TypeCode, value: T, capacity: Optional[int] = None) -> None:
        if capacity is None:
            self._defaults[code] = value
        else:
            if capacity < 0:
                raise ValueError(f"Capacity for {code.name} must be non-negative, got {capacity}")
            self._weighted.setdefault(code, {})[capacity] = value

    def freeze(self) -> Tuple[Dict[TypeCode, Tuple[Tuple[int, T], ...]], Dict[TypeCode, T]]:
        weighted = {
            code: tuple(sorted(entries.items())) for code, entries in self._weighted.items()
        }
        return weighted, dict(self._defaults)


class TypeNameTable(CapacityTable[str]):
    """
    Resolves a type code and size to a native type name.
    """

    def resolve(self, code: TypeCode, size: Size | None = None) -> str:
        size = size or Size()
        pattern = self.lookup(code, size.capacity())
        if pattern is None:
            fallback = FALLBACK_CODES.get(code)
            if fallback is not None:
                return self.resolve(fallback, size)
            raise NoMappingError(
                f"No type mapping for type code {code.name}, length: {size.length}",
                code=code,
                size=size,
            )
        return substitute(pattern, size)

    def raw(self, code: TypeCode) -> str:
        pattern = self.default(code)
        if pattern is None:
            fallback = FALLBACK_CODES.get(code)
            if fallback is not None:
                return self.raw(fallback)
            raise NoMappingError(f"No default type mapping for type code {code.name}", code=code)
        paren = pattern.find("(")
        return pattern[:paren] if paren > 0 else pattern

    def contains_type_name(self, type_name: str) -> bool:
        return any(pattern == type_name for pattern in self.values())

    def entries(self) -> List[TypeNameEntry]:
        result: List[TypeNameEntry] = []
        for code, weighted in self._weighted.items():
            result.extend(TypeNameEntry(code, ceiling, pattern) for ceiling, pattern in weighted)
        result.extend(TypeNameEntry(code, None, pattern) for code, pattern in self._defaults.items())
        return result


class TypeNameTableBuilder(CapacityTableBuilder[str]):
    def register(self, code: TypeCode, pattern: str, capacity: Optional[int] = None) -> None:
        self.put(code, pattern, capacity)

    def build(self) -> TypeNameTable:
        weighted, defaults = self.freeze()
        return TypeNameTable(weighted, defaults)


class LanguageTypeTable(CapacityTable[LanguageType]):
    """
    Maps a type code (and optional length) back to a language type, used to
    detect result types of native queries.
    """


class LanguageTypeTableBuilder(CapacityTableBuilder[LanguageType]):
    def register(
        self, code: TypeCode, language_type: LanguageType, capacity: Optional[int] = None
    ) -> None:
        self.put(code, language_type, capacity)

    def build(self) -> LanguageTypeTable:
        weighted, defaults = self.freeze()
        return LanguageTypeTable(weighted, defaults)


def substitute(pattern: str, size: Size) -> str:
    """
    Replace ``$l``, ``$p`` and ``$s`` with the populated dimensions of ``size``.
    """
    result = pattern
    if size.length is not None:
        result = result.replace("$l", str(size.length))
    if size.precision is not None:
        result = result.replace("$p", str(size.precision))
    if size.scale is not None:
        result = result.replace("$s", str(size.scale))
    return result


def unresolved_placeholders(type_name: str) -> List[str]:
    return [marker for marker in ("$l", "$p", "$s") if marker in type_name]
