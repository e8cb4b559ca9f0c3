"""Helpers for plotted label/value series: CSV export, OHLC cards, range slicing."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chart_insights.models import SeriesSnapshot
from chart_insights.stats import NAN, finite_values

# Range buttons → number of trailing points kept
RANGE_POINTS = {"1M": 1, "3M": 3, "1Y": 12, "5Y": 60}


def format_number(v: Any) -> str:
    """Render a number the short way: 10 rather than 10.0."""
    if isinstance(v, bool):
        return str(v).lower()
    if isinstance(v, float):
        if v != v:
            return "NaN"
        if v in (float("inf"), float("-inf")):
            return "Infinity" if v > 0 else "-Infinity"
        if v.is_integer():
            return str(int(v))
    if v is None:
        return ""
    return str(v)


def to_csv(
    labels: Sequence[Any],
    values: Sequence[Any],
    header: tuple[str, str] = ("Year", "Value"),
) -> str:
    """Build two-column CSV text (no trailing newline) from parallel sequences."""
    lines = [",".join(header)]
    for label, value in zip(labels, values):
        lines.append(f"{format_number(label)},{format_number(value)}")
    return "\n".join(lines)


def series_snapshot(values: Sequence[Any]) -> SeriesSnapshot:
    """Open/high/low/close over the finite values of a series."""
    clean = finite_values(values)
    if not clean:
        return SeriesSnapshot(open=NAN, high=NAN, low=NAN, close=NAN)
    return SeriesSnapshot(
        open=clean[0],
        high=max(clean),
        low=min(clean),
        close=clean[-1],
    )


def slice_range(
    labels: Sequence[Any],
    values: Sequence[Any],
    range_key: str | None,
) -> tuple[list[Any], list[Any]]:
    """Keep the last N points for a range button; unknown keys keep everything."""
    total = len(labels)
    n = min(total, RANGE_POINTS.get((range_key or "").upper(), total))
    if n <= 0:
        return [], []
    return list(labels[-n:]), list(values[-n:])
