"""Policy-rate history: flattening, cutoffs, latest-rate cards and context eras.

A rate history is a nested mapping loaded from JSON::

    {
      "refi":    {"2024": [{"date": "2024-01-15", "value": 4.5}, ...], ...},
      "deposit": {...},
      "lending": {...}
    }

Years are keyed by string, observations are kept in file order within a
year, and ``value`` may be null for months without a published rate.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import TypeAdapter, ValidationError

from chart_insights.context_periods import CONTEXT_PERIODS
from chart_insights.models import (
    ContextPeriod,
    ContextWindow,
    RateObservation,
    RateSnapshot,
    YearWindow,
)
from chart_insights.series import to_csv

log = logging.getLogger(__name__)

RATE_TYPES = ("refi", "deposit", "lending")
RATE_NAMES = {
    "refi": "Main Refinancing Rate",
    "deposit": "Deposit Facility Rate",
    "lending": "Marginal Lending Rate",
}

TREND_UP = "↗ Increasing"
TREND_DOWN = "↘ Decreasing"
TREND_FLAT = "↔ No change"

RateHistory = dict[str, dict[str, list[RateObservation]]]
_HISTORY_ADAPTER = TypeAdapter(RateHistory)


class RateHistoryError(ValueError):
    """Rate history is unreadable, malformed, or lacks the requested series."""


# ═══════════════════════════════════════════════════════════════════════════
#  Loading
# ═══════════════════════════════════════════════════════════════════════════

def parse_history(raw: Any) -> RateHistory:
    """Validate an already-decoded history mapping."""
    try:
        return _HISTORY_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise RateHistoryError(f"Malformed rate history: {exc.error_count()} invalid field(s)") from exc


def load_history(path: str | Path) -> RateHistory:
    """Read and validate a rate history JSON file."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RateHistoryError(f"Could not read rate history {path}: {exc}") from exc
    history = parse_history(raw)
    log.info("Loaded rate history from %s (%s)", path, ", ".join(sorted(history)))
    return history


def _years(history: RateHistory, rate_type: str) -> dict[str, list[RateObservation]]:
    try:
        return history[rate_type]
    except KeyError:
        raise RateHistoryError(f"Unknown rate type '{rate_type}'") from None


def _sorted_years(by_year: dict[str, list[RateObservation]], newest_first: bool = False) -> list[str]:
    return sorted(by_year, key=int, reverse=newest_first)


# ═══════════════════════════════════════════════════════════════════════════
#  Flattening & cutoffs
# ═══════════════════════════════════════════════════════════════════════════

def history_frame(history: RateHistory, rate_type: str) -> pd.DataFrame:
    """Flatten one rate series into a frame with ``label`` (YYYY-MM), ``date``, ``value``."""
    by_year = _years(history, rate_type)
    records = []
    for year in _sorted_years(by_year):
        for obs in by_year[year]:
            parts = obs.date.split("-")
            month = parts[1] if len(parts) > 1 else "01"
            records.append({"label": f"{year}-{month}", "date": obs.date, "value": obs.value})
    frame = pd.DataFrame.from_records(records, columns=["label", "date", "value"])
    frame["value"] = pd.to_numeric(frame["value"], errors="coerce")
    return frame


def apply_cutoff(frame: pd.DataFrame, cutoff: str | None, column: str = "label") -> pd.DataFrame:
    """Drop everything from the first row whose label starts with ``cutoff``."""
    if not cutoff or frame.empty:
        return frame
    hits = frame[column].astype(str).str.startswith(cutoff).to_numpy()
    if not hits.any():
        return frame
    return frame.iloc[: int(hits.argmax())]


def frame_values(frame: pd.DataFrame) -> list[float | None]:
    """Frame ``value`` column as JSON-friendly floats (None for gaps)."""
    return [None if pd.isna(v) else float(v) for v in frame["value"]]


def rate_series_csv(history: RateHistory, rate_type: str, cutoff: str | None = None) -> str:
    """``Month,Rate`` CSV of the published values, ready for the rich analyzer."""
    frame = apply_cutoff(history_frame(history, rate_type), cutoff).dropna(subset=["value"])
    return to_csv(list(frame["label"]), frame_values(frame), header=("Month", "Rate"))


# ═══════════════════════════════════════════════════════════════════════════
#  Latest rate card
# ═══════════════════════════════════════════════════════════════════════════

def latest_rate_and_trend(history: RateHistory, rate_type: str) -> RateSnapshot:
    """Latest published value and its direction versus the one before it."""
    by_year = _years(history, rate_type)
    latest: float | None = None
    previous: float | None = None

    for year in _sorted_years(by_year, newest_first=True):
        for obs in reversed(by_year[year]):
            if obs.value is None:
                continue
            if latest is None:
                latest = obs.value
            elif previous is None:
                previous = obs.value
                break
        if previous is not None:
            break

    trend = TREND_FLAT
    if latest is not None and previous is not None:
        if latest > previous:
            trend = TREND_UP
        elif latest < previous:
            trend = TREND_DOWN
    return RateSnapshot(rate_type=rate_type, value=latest, previous=previous, trend=trend)


# ═══════════════════════════════════════════════════════════════════════════
#  Per-year detail
# ═══════════════════════════════════════════════════════════════════════════

def adjacent_year(history: RateHistory, rate_type: str, year: str, direction: str) -> str:
    """Step to the older ("prev") or newer ("next") year, stopping at the ends."""
    years = _sorted_years(_years(history, rate_type), newest_first=True)
    if year not in years:
        raise RateHistoryError(f"No {rate_type} data for {year}")
    idx = years.index(year)
    if direction == "prev":
        idx = min(idx + 1, len(years) - 1)
    elif direction == "next":
        idx = max(idx - 1, 0)
    else:
        raise ValueError(f"direction must be 'prev' or 'next', not {direction!r}")
    return years[idx]


def year_window(
    history: RateHistory,
    rate_type: str,
    year: str | int | None = None,
    cutoff: str | None = None,
) -> YearWindow:
    """Observations for a single year (newest year by default)."""
    by_year = _years(history, rate_type)
    years = _sorted_years(by_year, newest_first=True)
    if not years:
        raise RateHistoryError(f"No {rate_type} data")
    year = str(year) if year is not None else years[0]
    if year not in by_year:
        raise RateHistoryError(f"No {rate_type} data for {year}")

    frame = pd.DataFrame.from_records(
        [o.model_dump() for o in by_year[year]], columns=["date", "value"]
    )
    frame["value"] = pd.to_numeric(frame["value"], errors="coerce")
    frame = apply_cutoff(frame, cutoff, column="date")

    prev_year = adjacent_year(history, rate_type, year, "prev")
    next_year = adjacent_year(history, rate_type, year, "next")
    return YearWindow(
        rate_type=rate_type,
        year=year,
        labels=list(frame["date"]),
        values=frame_values(frame),
        previous_year=prev_year if prev_year != year else None,
        next_year=next_year if next_year != year else None,
    )


# ═══════════════════════════════════════════════════════════════════════════
#  Context eras
# ═══════════════════════════════════════════════════════════════════════════

def period_indices(labels: Sequence[str], start: str, end: str) -> tuple[int, int]:
    """Index range [start_idx, end_idx) of labels inside an inclusive period.

    ``start_idx`` is -1 when no label reaches ``start``; ``end_idx`` is
    ``len(labels)`` when no label passes ``end``.
    """
    start_idx = next((i for i, lab in enumerate(labels) if lab >= start), -1)
    end_idx = next((i for i, lab in enumerate(labels) if lab > end), len(labels))
    return start_idx, end_idx


def context_windows(
    labels: Sequence[str],
    periods: Sequence[ContextPeriod] = CONTEXT_PERIODS,
) -> list[ContextWindow]:
    """Context eras that overlap the plotted labels, with their index ranges."""
    windows = []
    for period in periods:
        start_idx, end_idx = period_indices(labels, period.start, period.end)
        if start_idx == -1 or start_idx >= end_idx:
            continue
        windows.append(
            ContextWindow(**period.model_dump(), start_index=start_idx, end_index=end_idx)
        )
    return windows


def periods_at(
    labels: Sequence[str],
    label: str,
    periods: Sequence[ContextPeriod] = CONTEXT_PERIODS,
) -> list[ContextWindow]:
    """Context eras covering one plotted label (empty when the label is not plotted)."""
    labels = list(labels)
    if label not in labels:
        return []
    idx = labels.index(label)
    return [w for w in context_windows(labels, periods) if w.start_index <= idx < w.end_index]


# ═══════════════════════════════════════════════════════════════════════════
#  Shared history
# ═══════════════════════════════════════════════════════════════════════════

_history: RateHistory | None = None


def get_history() -> RateHistory:
    """Get or load the configured rate history (RATE_HISTORY_PATH)."""
    global _history
    if _history is not None:
        return _history

    from chart_insights.config import get_config

    path = get_config().rate_history_path
    if not path:
        raise RateHistoryError(
            "RATE_HISTORY_PATH is not set. "
            "Point it at a rate history JSON file to use the rate tools."
        )
    _history = load_history(path)
    return _history
