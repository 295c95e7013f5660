"""
Metric primitives shared by every analyzer.

All helpers are pure: they never mutate their inputs and never raise for
missing or malformed values. Division is always zero-guarded.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, Sequence, TypeVar

from .models import to_number

T = TypeVar("T")

UNKNOWN_KEY = "unknown"


def _bucket(key: Any) -> str:
    return UNKNOWN_KEY if key is None else str(key)


def group_count(items: Iterable[T], key_fn: Callable[[T], Any]) -> Dict[str, int]:
    """
    Count items per key. ``None`` keys land in an explicit ``"unknown"`` bucket.
    """

    counts: Dict[str, int] = defaultdict(int)
    for item in items:
        counts[_bucket(key_fn(item))] += 1
    return dict(counts)


def group_sum(
    items: Iterable[T],
    key_fn: Callable[[T], Any],
    value_fn: Callable[[T], Any],
) -> Dict[str, float]:
    totals: Dict[str, float] = defaultdict(float)
    for item in items:
        totals[_bucket(key_fn(item))] += to_number(value_fn(item))
    return dict(totals)


def sum_values(items: Iterable[T], value_fn: Callable[[T], Any]) -> float:
    return sum((to_number(value_fn(item)) for item in items), 0.0)


def average(items: Sequence[T], value_fn: Callable[[T], Any]) -> float:
    if not items:
        return 0.0
    return sum_values(items, value_fn) / len(items)


def ratio(numerator: Any, denominator: Any, scale: float = 100) -> float:
    denominator = to_number(denominator)
    if not denominator:
        return 0.0
    return to_number(numerator) / denominator * scale


def round_half_up(value: float) -> int:
    # Python's round() rounds halves to even; growth percentages round .5 up.
    return int(math.floor(value + 0.5))
