"""
Reserved-word sets used to decide when identifiers must be quoted.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Set

SQL_2003_RESERVED_WORDS = frozenset(
    """
    add all allocate alter and any are array as asensitive asymmetric at atomic
    authorization begin between bigint binary blob boolean both by call called
    cascaded case cast char character check clob close collate column commit
    condition connect constraint continue corresponding create cross cube current
    current_date current_default_transform_group current_path current_role
    current_time current_timestamp current_transform_group_for_type current_user
    cursor cycle date day deallocate dec decimal declare default delete deref
    describe deterministic disconnect distinct do double drop dynamic each element
    else elseif end escape except exec execute exists exit external false fetch
    filter float for foreign free from full function get global grant group
    grouping handler having hold hour identity if immediate in indicator inner
    inout input insensitive insert int integer intersect interval into is iterate
    join language large lateral leading leave left like local localtime
    localtimestamp loop match member merge method minute modifies module month
    multiset national natural nchar nclob new no none not null numeric of old on
    only open or order out outer output over overlaps parameter partition
    precision prepare primary procedure range reads real recursive ref references
    referencing release repeat resignal result return returns revoke right
    rollback rollup row rows savepoint scroll search second select sensitive
    session_user set signal similar smallint some specific specifictype sql
    sqlexception sqlstate sqlwarning start static submultiset symmetric system
    system_user table then time timestamp timezone_hour timezone_minute to
    trailing translation treat trigger true undo union unique unknown unnest until
    update user using value values varchar varying when whenever where while
    window with within without year
    """.split()
)


class KeywordSet:
    """
    Immutable set of lower-cased reserved words.
    """

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[str]) -> None:
        self._words = frozenset(words)

    def is_keyword(self, word: str) -> bool:
        return word.lower() in self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.is_keyword(word)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._words))

    def __len__(self) -> int:
        return len(self._words)


class KeywordSetBuilder:
    def __init__(self) -> None:
        self._words: Set[str] = set()

    def register(self, word: str) -> None:
        # tokens are always compared against their lower-case form
        word = word.strip()
        if word:
            self._words.add(word.lower())

    def register_all(self, words: Iterable[str]) -> None:
        for word in words:
            self.register(word)

    def register_defaults(self) -> None:
        self.register_all(SQL_2003_RESERVED_WORDS)

    def register_reported(self, reported: str | Iterable[str] | None) -> None:
        """
        Register backend-reported keywords, given as a comma separated string
        or an iterable of words.
        """
        if not reported:
            return
        if isinstance(reported, str):
            reported = reported.split(",")
        self.register_all(reported)

    def build(self) -> KeywordSet:
        return KeywordSet(self._words)
