"""
Positional ``?N`` pattern substitution shared by casts and function emulation.
"""

import re
from typing import Sequence


_ARGUMENT_RE = re.compile(r"\?(\d+)")


def pattern_arity(pattern: str) -> int:
    """
    Return the highest ``?N`` index referenced by ``pattern`` (0 if none).
    """
    indexes = [int(match) for match in _ARGUMENT_RE.findall(pattern)]
    return max(indexes, default=0)


def render_pattern(pattern: str, args: Sequence[str]) -> str:
    """
    Replace ``?1``, ``?2`` ... in ``pattern`` with the matching argument.
    """
    required = pattern_arity(pattern)
    if len(args) < required:
        raise ValueError(
            f"Pattern '{pattern}' expects {required} arguments, received {len(args)}."
        )
    return _ARGUMENT_RE.sub(lambda match: str(args[int(match.group(1)) - 1]), pattern)
