"""
Batch sizing for key-based loading and IN-list parameter padding.

Padding the number of bound parameters to a power of two keeps the number of
distinct statements small, which keeps backend plan caches warm.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Union


def ceiling_power_of_two(value: int) -> int:
    """
    Smallest power of two greater than or equal to ``value`` (``value >= 1``).
    """
    if value < 1:
        raise ValueError(f"value must be positive, got {value}")
    return 1 << (value - 1).bit_length()


def determine_batch_size(key_column_count: int, key_count: int, in_list_ceiling: int) -> int:
    if key_column_count < 1:
        raise ValueError(f"key_column_count must be positive, got {key_column_count}")
    if key_count < 0:
        raise ValueError(f"key_count must not be negative, got {key_count}")
    if key_count == 0:
        return 0

    padded = ceiling_power_of_two(key_count)
    # tuple IN-lists have no ceiling
    if key_column_count > 1:
        return padded
    if in_list_ceiling <= 0 or padded < in_list_ceiling:
        return padded
    if key_count < in_list_ceiling:
        return key_count
    return in_list_ceiling


@dataclass(frozen=True)
class BatchLoadSizingStrategy:
    """
    Batch sizing bound to one backend's IN-list ceiling (``<= 0``: unbounded).
    """

    in_list_ceiling: int = 0

    def size(self, key_column_count: int, key_count: int) -> int:
        return determine_batch_size(key_column_count, key_count, self.in_list_ceiling)


def pad_parameters(values: Sequence[Any], padded_size: int) -> List[Any]:
    """
    Repeat the last value until ``padded_size`` values are present.
    """
    padded = list(values)
    if not padded or len(padded) >= padded_size:
        return padded
    padded.extend([padded[-1]] * (padded_size - len(padded)))
    return padded


def render_in_list(
    column: str,
    values: Sequence[Any],
    placeholder: Union[str, Callable[[int], str]],
    *,
    sizing: BatchLoadSizingStrategy | None = None,
    pad: bool = True,
) -> Tuple[str, List[Any]]:
    """
    Render ``column in(?,...)`` with a padded parameter list. ``placeholder``
    is either fixed text or a callable taking the 1-based parameter position.

    Values beyond the backend's ceiling are not dropped: the caller is
    expected to split batches larger than the ceiling before rendering.
    """
    if not values:
        raise ValueError("IN-list requires at least one value.")
    sizing = sizing or BatchLoadSizingStrategy()
    target = sizing.size(1, len(values)) if pad else len(values)
    if target < len(values):
        raise ValueError(
            f"{len(values)} values exceed the IN-list ceiling of {sizing.in_list_ceiling}."
        )
    params = pad_parameters(values, target)
    if callable(placeholder):
        placeholders = ",".join(placeholder(position) for position in range(1, len(params) + 1))
    else:
        placeholders = ",".join(placeholder for _ in params)
    return f"{column} in({placeholders})", params
