"""
Portable SQL function names and how each backend renders them.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from .errors import NoMappingError
from .utils.patterns import pattern_arity, render_pattern


class SqlFunction(Protocol):
    name: str

    def render(self, args: Sequence[str]) -> str: ...


def _check_arity(name: str, args: Sequence[str], min_args: int, max_args: Optional[int]) -> None:
    count = len(args)
    if count < min_args or (max_args is not None and count > max_args):
        if max_args is None:
            expected = f"at least {min_args}"
        elif min_args == max_args:
            expected = str(min_args)
        else:
            expected = f"{min_args} to {max_args}"
        raise ValueError(f"Function '{name}' expects {expected} arguments, received {count}.")


@dataclass(frozen=True)
class NativeFunction:
    """
    Passed through to a backend function of the same (or another) name.
    """

    name: str
    sql_name: str
    min_args: int = 0
    max_args: Optional[int] = None

    def render(self, args: Sequence[str]) -> str:
        _check_arity(self.name, args, self.min_args, self.max_args)
        return f"{self.sql_name}({', '.join(args)})"


@dataclass(frozen=True)
class PatternFunction:
    """
    Emulated through a ``?N`` pattern taking exactly as many arguments as it references.
    """

    name: str
    pattern: str

    @property
    def arity(self) -> int:
        return pattern_arity(self.pattern)

    def render(self, args: Sequence[str]) -> str:
        _check_arity(self.name, args, self.arity, self.arity)
        return render_pattern(self.pattern, args)


@dataclass(frozen=True)
class InfixFunction:
    name: str
    operator: str

    def render(self, args: Sequence[str]) -> str:
        _check_arity(self.name, args, 2, None)
        return "(" + f" {self.operator} ".join(args) + ")"


@dataclass(frozen=True)
class NullaryFunction:
    """
    Rendered without parentheses, e.g. ``current_timestamp``.
    """

    name: str
    sql: str

    def render(self, args: Sequence[str]) -> str:
        _check_arity(self.name, args, 0, 0)
        return self.sql


class FunctionRegistry:
    """
    Immutable name -> function lookup; names are case-insensitive.
    """

    def __init__(self, functions: Mapping[str, SqlFunction]) -> None:
        self._functions = MappingProxyType(dict(functions))

    def find(self, name: str) -> Optional[SqlFunction]:
        return self._functions.get(name.lower())

    def get(self, name: str) -> SqlFunction:
        function = self.find(name)
        if function is None:
            raise NoMappingError(f"No function mapping for '{name}'")
        return function

    def render(self, name: str, args: Sequence[str] = ()) -> str:
        return self.get(name).render(list(args))

    def names(self) -> List[str]:
        return sorted(self._functions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._functions

    def __len__(self) -> int:
        return len(self._functions)


class FunctionRegistryBuilder:
    def __init__(self) -> None:
        self._functions: Dict[str, SqlFunction] = {}
        self._alternate_keys: Dict[str, str] = {}

    def register(self, function: SqlFunction) -> None:
        self._functions[function.name.lower()] = function

    def register_native(
        self,
        name: str,
        sql_name: str | None = None,
        *,
        min_args: int = 0,
        max_args: Optional[int] = None,
    ) -> None:
        self.register(NativeFunction(name, sql_name or name, min_args, max_args))

    def register_pattern(self, name: str, pattern: str) -> None:
        self.register(PatternFunction(name, pattern))

    def register_infix(self, name: str, operator: str) -> None:
        self.register(InfixFunction(name, operator))

    def register_nullary(self, name: str, sql: str | None = None) -> None:
        self.register(NullaryFunction(name, sql or name))

    def register_alternate_key(self, alias: str, name: str) -> None:
        self._alternate_keys[alias.lower()] = name.lower()

    def build(self) -> FunctionRegistry:
        functions = dict(self._functions)
        for alias, target in self._alternate_keys.items():
            # an explicit registration under the alias wins
            if alias in self._functions:
                continue
            if target not in self._functions:
                raise ValueError(f"Alternate key '{alias}' refers to unregistered function '{target}'.")
            functions[alias] = self._functions[target]
        return FunctionRegistry(functions)


def register_standard_functions(builder: FunctionRegistryBuilder) -> None:
    """
    Register the ANSI rendition of every portable function; backends replace
    individual entries afterwards.
    """
    for aggregate in ("count", "sum", "avg", "min", "max"):
        builder.register_native(aggregate, min_args=1, max_args=1)
    builder.register_pattern("every", "(sum(case when ?1 then 0 else 1 end)=0)")
    builder.register_pattern("any", "(sum(case when ?1 then 1 else 0 end)>0)")
    builder.register_alternate_key("bool_and", "every")
    builder.register_alternate_key("bool_or", "any")

    for unary in ("abs", "sign", "sqrt", "exp", "ln", "floor", "ceiling"):
        builder.register_native(unary, min_args=1, max_args=1)
    builder.register_alternate_key("ceil", "ceiling")
    builder.register_native("mod", min_args=2, max_args=2)
    builder.register_native("power", min_args=2, max_args=2)
    builder.register_native("round", min_args=1, max_args=2)
    for trig in ("sin", "cos", "tan", "asin", "acos", "atan"):
        builder.register_native(trig, min_args=1, max_args=1)
    builder.register_native("atan2", min_args=2, max_args=2)

    builder.register_native("coalesce", min_args=1)
    builder.register_alternate_key("ifnull", "coalesce")
    builder.register_native("nullif", min_args=2, max_args=2)
    builder.register_native("greatest", min_args=1)
    builder.register_native("least", min_args=1)

    builder.register_infix("concat", "||")
    builder.register_native("lower", min_args=1, max_args=1)
    builder.register_native("upper", min_args=1, max_args=1)
    builder.register_native("left", min_args=2, max_args=2)
    builder.register_native("right", min_args=2, max_args=2)
    builder.register_native("replace", min_args=3, max_args=3)
    builder.register_native("substring", min_args=2, max_args=3)
    builder.register_native("length", "character_length", min_args=1, max_args=1)
    builder.register_native("trim", min_args=1, max_args=1)
    builder.register_native("lpad", min_args=2, max_args=3)
    builder.register_native("rpad", min_args=2, max_args=3)
    builder.register_pattern("locate", "position(?1 in ?2)")
    builder.register_pattern("extract", "extract(?1 from ?2)")
    builder.register_pattern("str", "cast(?1 as varchar)")

    builder.register_nullary("current_date")
    builder.register_nullary("current_time")
    builder.register_nullary("current_timestamp")
    builder.register_alternate_key("local_date", "current_date")
    builder.register_alternate_key("local_time", "current_time")
    builder.register_alternate_key("local_datetime", "current_timestamp")
    builder.register_alternate_key("instant", "current_timestamp")
