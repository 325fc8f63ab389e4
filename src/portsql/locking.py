"""
Lock modes, row-lock clause generation and per-mode locking strategies.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from .dialects.base import Dialect

NO_WAIT = 0
WAIT_FOREVER = -1
SKIP_LOCKED = -2


class LockMode(Enum):
    NONE = "none"
    READ = "read"
    OPTIMISTIC = "optimistic"
    OPTIMISTIC_FORCE_INCREMENT = "optimistic_force_increment"
    WRITE = "write"
    UPGRADE = "upgrade"
    UPGRADE_NOWAIT = "upgrade_nowait"
    UPGRADE_SKIPLOCKED = "upgrade_skiplocked"
    PESSIMISTIC_READ = "pessimistic_read"
    PESSIMISTIC_WRITE = "pessimistic_write"
    FORCE = "force"
    PESSIMISTIC_FORCE_INCREMENT = "pessimistic_force_increment"

    @property
    def level(self) -> int:
        return _LEVELS[self]

    def greater_than(self, other: "LockMode") -> bool:
        return self.level > other.level

    def less_than(self, other: "LockMode") -> bool:
        return self.level < other.level

    @classmethod
    def parse(cls, text: str) -> "LockMode":
        normalized = text.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown lock mode '{text}'") from exc


_LEVELS = {
    LockMode.NONE: 0,
    LockMode.READ: 5,
    LockMode.OPTIMISTIC: 6,
    LockMode.OPTIMISTIC_FORCE_INCREMENT: 7,
    LockMode.WRITE: 10,
    LockMode.UPGRADE: 10,
    LockMode.UPGRADE_NOWAIT: 10,
    LockMode.UPGRADE_SKIPLOCKED: 10,
    LockMode.PESSIMISTIC_READ: 12,
    LockMode.PESSIMISTIC_WRITE: 13,
    LockMode.FORCE: 15,
    LockMode.PESSIMISTIC_FORCE_INCREMENT: 17,
}


def max_lock_mode(modes: Iterable[LockMode], start: LockMode = LockMode.NONE) -> LockMode:
    """
    Highest lock mode; among equal levels the first one seen wins.
    """
    result = start
    for mode in modes:
        if mode.greater_than(result):
            result = mode
    return result


@dataclass(frozen=True)
class LockOptions:
    lock_mode: LockMode = LockMode.NONE
    timeout_ms: int = WAIT_FOREVER
    alias_lock_modes: Mapping[str, LockMode] = field(default_factory=dict)

    def effective_lock_mode(self) -> LockMode:
        return max_lock_mode(self.alias_lock_modes.values(), start=self.lock_mode)

    def with_effective_lock_mode(self) -> "LockOptions":
        return replace(self, lock_mode=self.effective_lock_mode())


class RowLockStrategy(Enum):
    """
    How a backend names the rows to lock in ``for update of ...``.
    """

    NONE = "none"
    TABLE = "table"
    COLUMN = "column"


def timeout_in_seconds(timeout_ms: int) -> int:
    return max(1, (timeout_ms + 500) // 1000)


@dataclass(frozen=True)
class LockClauses:
    """
    Row-lock clause text for one backend. ``None`` suffixes mark lock
    variants the backend does not support; those fall back to the plain
    clause.
    """

    write_keyword: str = " for update"
    read_keyword: str = " for update"
    nowait_suffix: Optional[str] = None
    skip_locked_suffix: Optional[str] = None
    wait_suffix: Optional[str] = None
    write_row_lock_strategy: RowLockStrategy = RowLockStrategy.NONE
    read_row_lock_strategy: Optional[RowLockStrategy] = None

    @property
    def supports_no_wait(self) -> bool:
        return self.nowait_suffix is not None

    @property
    def supports_skip_locked(self) -> bool:
        return self.skip_locked_suffix is not None

    @property
    def supports_wait(self) -> bool:
        return self.wait_suffix is not None or self.supports_no_wait

    def row_lock_strategy_for(self, read: bool) -> RowLockStrategy:
        if read and self.read_row_lock_strategy is not None:
            return self.read_row_lock_strategy
        return self.write_row_lock_strategy

    def for_update(self, aliases: Optional[str] = None) -> str:
        return self.write_keyword + self._of(aliases, read=False)

    def for_update_nowait(self, aliases: Optional[str] = None) -> str:
        return self.for_update(aliases) + (self.nowait_suffix or "")

    def for_update_skip_locked(self, aliases: Optional[str] = None) -> str:
        return self.for_update(aliases) + (self.skip_locked_suffix or "")

    def write_lock(self, timeout_ms: int, aliases: Optional[str] = None) -> str:
        return self._with_timeout(self.write_keyword, timeout_ms, aliases, read=False)

    def read_lock(self, timeout_ms: int, aliases: Optional[str] = None) -> str:
        return self._with_timeout(self.read_keyword, timeout_ms, aliases, read=True)

    def _with_timeout(self, keyword: str, timeout_ms: int, aliases: Optional[str], *, read: bool) -> str:
        clause = keyword + self._of(aliases, read=read)
        if not keyword:
            return clause
        if timeout_ms == NO_WAIT and self.nowait_suffix is not None:
            return clause + self.nowait_suffix
        if timeout_ms == SKIP_LOCKED and self.skip_locked_suffix is not None:
            return clause + self.skip_locked_suffix
        if timeout_ms > 0 and self.wait_suffix is not None:
            return clause + self.wait_suffix.format(seconds=timeout_in_seconds(timeout_ms))
        return clause

    def _of(self, aliases: Optional[str], *, read: bool) -> str:
        if not aliases or not self.write_keyword:
            return ""
        if self.row_lock_strategy_for(read) is RowLockStrategy.NONE:
            return ""
        return f" of {aliases}"


class LockHintStrategy(Protocol):
    def append_lock_hint(self, options: LockOptions, table: str) -> str: ...


class NoLockHints:
    def append_lock_hint(self, options: LockOptions, table: str) -> str:
        return table


class TableHintLocking:
    """
    Lock hints attached to the table reference (``t with (updlock, rowlock)``).
    """

    def append_lock_hint(self, options: LockOptions, table: str) -> str:
        mode = options.lock_mode
        no_wait = ", nowait" if mode is LockMode.UPGRADE_NOWAIT or options.timeout_ms == NO_WAIT else ""
        skip = (
            ", readpast"
            if mode is LockMode.UPGRADE_SKIPLOCKED or options.timeout_ms == SKIP_LOCKED
            else ""
        )
        if mode in (LockMode.UPGRADE_NOWAIT, LockMode.PESSIMISTIC_WRITE, LockMode.WRITE):
            return f"{table} with (updlock, holdlock, rowlock{no_wait})"
        if mode is LockMode.UPGRADE:
            return f"{table} with (updlock, holdlock, rowlock)"
        if mode is LockMode.UPGRADE_SKIPLOCKED:
            return f"{table} with (updlock, rowlock{skip})"
        if mode is LockMode.PESSIMISTIC_READ:
            return f"{table} with (holdlock, rowlock{no_wait}{skip})"
        return table


@dataclass(frozen=True)
class Lockable:
    """
    Table shape needed to lock one row by id.
    """

    table: str
    id_columns: Tuple[str, ...]
    version_column: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.id_columns:
            raise ValueError(f"Lockable '{self.table}' requires at least one id column.")


class LockingStrategy(Protocol):
    lock_mode: LockMode

    def statements(self, dialect: "Dialect", lockable: Lockable, timeout_ms: int = WAIT_FOREVER) -> List[str]: ...


def _where_id(dialect: "Dialect", lockable: Lockable, *, with_version: bool, first_position: int = 1) -> str:
    columns = list(lockable.id_columns)
    if with_version and lockable.version_column:
        columns.append(lockable.version_column)
    return " and ".join(
        f"{dialect.quote_identifier(column)} = {dialect.parameter_placeholder(first_position + offset)}"
        for offset, column in enumerate(columns)
    )


@dataclass(frozen=True)
class SelectLockingStrategy:
    """
    Locks the row with ``select ... for update`` (or the backend equivalent).
    """

    lock_mode: LockMode

    def statements(self, dialect: "Dialect", lockable: Lockable, timeout_ms: int = WAIT_FOREVER) -> List[str]:
        options = LockOptions(self.lock_mode, timeout_ms)
        table = dialect.append_lock_hint(options, dialect.format_table(lockable.table))
        id_column = dialect.quote_identifier(lockable.id_columns[0])
        where = _where_id(dialect, lockable, with_version=True)
        fragment = dialect.for_update_fragment(self.lock_mode, timeout_ms)
        return [f"select {id_column} from {table} where {where}{fragment}"]


@dataclass(frozen=True)
class PessimisticReadSelectLockingStrategy(SelectLockingStrategy):
    """Selected for PESSIMISTIC_READ; renders like ``SelectLockingStrategy``."""


@dataclass(frozen=True)
class PessimisticWriteSelectLockingStrategy(SelectLockingStrategy):
    """Selected for PESSIMISTIC_WRITE; renders like ``SelectLockingStrategy``."""


@dataclass(frozen=True)
class OptimisticLockingStrategy:
    """
    No statement: the version is verified when the transaction flushes.
    """

    deferred = True

    lock_mode: LockMode

    def statements(self, dialect: "Dialect", lockable: Lockable, timeout_ms: int = WAIT_FOREVER) -> List[str]:
        if not lockable.version_column:
            raise ValueError(f"[{lockable.table}] not versioned; cannot apply {self.lock_mode.name}.")
        return []


@dataclass(frozen=True)
class _VersionIncrementStrategy:
    deferred = False

    lock_mode: LockMode

    def statements(self, dialect: "Dialect", lockable: Lockable, timeout_ms: int = WAIT_FOREVER) -> List[str]:
        if not lockable.version_column:
            raise ValueError(f"[{lockable.table}] not versioned; cannot apply {self.lock_mode.name}.")
        table = dialect.format_table(lockable.table)
        version = dialect.quote_identifier(lockable.version_column)
        placeholder = dialect.parameter_placeholder(1)
        where = _where_id(dialect, lockable, with_version=True, first_position=2)
        return [f"update {table} set {version} = {placeholder} where {where}"]


@dataclass(frozen=True)
class PessimisticForceIncrementLockingStrategy(_VersionIncrementStrategy):
    """
    Version bump issued immediately, together with the lock.
    """


@dataclass(frozen=True)
class OptimisticForceIncrementLockingStrategy(_VersionIncrementStrategy):
    """
    Version bump issued when the transaction completes.
    """

    deferred = True


@dataclass(frozen=True)
class LockingStrategySelector:
    """
    Maps lock modes onto locking strategies and lock clause text.
    """

    clauses: LockClauses = field(default_factory=LockClauses)
    hints: LockHintStrategy = field(default_factory=NoLockHints)

    def strategy(self, lock_mode: LockMode) -> LockingStrategy:
        if lock_mode is LockMode.PESSIMISTIC_FORCE_INCREMENT:
            return PessimisticForceIncrementLockingStrategy(lock_mode)
        if lock_mode is LockMode.PESSIMISTIC_WRITE:
            return PessimisticWriteSelectLockingStrategy(lock_mode)
        if lock_mode is LockMode.PESSIMISTIC_READ:
            return PessimisticReadSelectLockingStrategy(lock_mode)
        if lock_mode is LockMode.OPTIMISTIC:
            return OptimisticLockingStrategy(lock_mode)
        if lock_mode is LockMode.OPTIMISTIC_FORCE_INCREMENT:
            return OptimisticForceIncrementLockingStrategy(lock_mode)
        return SelectLockingStrategy(lock_mode)

    def for_update_fragment(
        self, lock_mode: LockMode, timeout_ms: int = WAIT_FOREVER, aliases: Optional[str] = None
    ) -> str:
        clauses = self.clauses
        if lock_mode is LockMode.UPGRADE:
            return clauses.for_update(aliases)
        if lock_mode is LockMode.PESSIMISTIC_READ:
            return clauses.read_lock(timeout_ms, aliases)
        if lock_mode is LockMode.PESSIMISTIC_WRITE:
            return clauses.write_lock(timeout_ms, aliases)
        if lock_mode in (LockMode.UPGRADE_NOWAIT, LockMode.FORCE, LockMode.PESSIMISTIC_FORCE_INCREMENT):
            return clauses.for_update_nowait(aliases)
        if lock_mode is LockMode.UPGRADE_SKIPLOCKED:
            return clauses.for_update_skip_locked(aliases)
        return ""

    def for_update_fragment_for(self, options: LockOptions, aliases: Optional[str] = None) -> str:
        return self.for_update_fragment(options.effective_lock_mode(), options.timeout_ms, aliases)

    def row_lock_strategy(self, lock_mode: LockMode) -> RowLockStrategy:
        if lock_mode is LockMode.PESSIMISTIC_READ:
            return self.clauses.row_lock_strategy_for(read=True)
        if lock_mode in (
            LockMode.WRITE,
            LockMode.FORCE,
            LockMode.PESSIMISTIC_FORCE_INCREMENT,
            LockMode.PESSIMISTIC_WRITE,
            LockMode.UPGRADE,
            LockMode.UPGRADE_SKIPLOCKED,
            LockMode.UPGRADE_NOWAIT,
        ):
            return self.clauses.row_lock_strategy_for(read=False)
        return RowLockStrategy.NONE

    def append_lock_hint(self, options: LockOptions, table: str) -> str:
        return self.hints.append_lock_hint(options, table)
