"""Primitive descriptive statistics over numeric series.

All functions are pure: they never mutate the caller's sequence and never
raise for short or degenerate input.  Empty input yields NaN for the
location statistics, while ``variance`` is defined as 0 below two points.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Any

NAN = float("nan")


def to_number(value: Any) -> float:
    """Coerce one caller-supplied element to float, NaN when impossible."""
    if value is None:
        return NAN
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return NAN
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return NAN


def finite_values(values: Iterable[Any] | None) -> list[float]:
    """Coerce every element and keep only the finite results, in order."""
    out: list[float] = []
    for v in values or ():
        n = to_number(v)
        if math.isfinite(n):
            out.append(n)
    return out


def mean(values: Sequence[float]) -> float:
    if not values:
        return NAN
    return sum(values) / len(values)


def median(values: Sequence[float]) -> float:
    if not values:
        return NAN
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def variance(values: Sequence[float]) -> float:
    """Population variance (divides by N)."""
    if len(values) < 2:
        return 0.0
    m = mean(values)
    return sum((v - m) ** 2 for v in values) / len(values)


def standard_deviation(values: Sequence[float]) -> float:
    return math.sqrt(variance(values))


def pearson_correlation(a: Sequence[float], b: Sequence[float]) -> float | None:
    """Pearson product-moment coefficient.

    Returns None instead of a value when the inputs are not sequences, differ
    in length, hold fewer than two points, or either one is constant.
    """
    if not isinstance(a, Sequence) or not isinstance(b, Sequence):
        return None
    if isinstance(a, str) or isinstance(b, str):
        return None
    if len(a) != len(b) or len(a) < 2:
        return None
    # Constant series have no spread
    if len(set(a)) < 2 or len(set(b)) < 2:
        return None

    ma = mean(a)
    mb = mean(b)
    denom_a = math.sqrt(sum((v - ma) ** 2 for v in a))
    denom_b = math.sqrt(sum((v - mb) ** 2 for v in b))
    if denom_a == 0 or denom_b == 0:
        return None

    cov = sum((x - ma) * (y - mb) for x, y in zip(a, b))
    return cov / (denom_a * denom_b)
