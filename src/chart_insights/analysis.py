"""Dataset analyzers: numeric summaries, comparisons and rich CSV insights.

Entry point is ``analyze_dataset`` which classifies the input shape once
(``classify_input``) and routes it:

  SCALAR_SEQUENCE  → analyze_dataset_numbers   (two-way trend, never errors)
  everything else  → analyze_dataset_rich      (three-way trend, may return
                                                an AnalysisError)

The two trend rules differ: the numeric path counts last == first
as "increasing", the rich path reports "stable".
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from enum import Enum
from typing import Any

import pandas as pd

from chart_insights.models import (
    AnalysisError,
    ComparisonDetails,
    ComparisonResult,
    DataRow,
    RichAnalysis,
    StatisticalSummary,
    SummaryStatistics,
)
from chart_insights.series import format_number
from chart_insights.stats import (
    NAN,
    finite_values,
    mean,
    median,
    pearson_correlation,
    standard_deviation,
    to_number,
    variance,
)

log = logging.getLogger(__name__)

ANOMALY_SIGMAS = 2
SEASONALITY_MIN_ROWS = 12
SEASONALITY_COLUMN = re.compile(r"month|date|time", re.IGNORECASE)
SEASONALITY_NOTE = "Possible seasonality detected (needs deeper analysis)."
CONTEXTUAL_INSIGHTS = "Contextual insights and economic context coming soon."

_LINE_SPLIT = re.compile(r"\n|\r")


class InputKind(str, Enum):
    SCALAR_SEQUENCE = "scalar_sequence"     # includes the empty sequence
    DELIMITED_TEXT = "delimited_text"
    PAIR_SEQUENCE = "pair_sequence"
    RECORD_SEQUENCE = "record_sequence"
    FRAME = "frame"
    UNSUPPORTED = "unsupported"


def classify_input(data: Any) -> InputKind:
    """Resolve the shape of caller input once, at the boundary."""
    if isinstance(data, str):
        return InputKind.DELIMITED_TEXT
    if isinstance(data, pd.DataFrame):
        return InputKind.FRAME
    if isinstance(data, pd.Series):
        return InputKind.SCALAR_SEQUENCE
    if isinstance(data, (list, tuple)):
        if not data:
            return InputKind.SCALAR_SEQUENCE
        first = data[0]
        if isinstance(first, (list, tuple)):
            return InputKind.PAIR_SEQUENCE
        if isinstance(first, dict):
            return InputKind.RECORD_SEQUENCE
        return InputKind.SCALAR_SEQUENCE
    return InputKind.UNSUPPORTED


# ═══════════════════════════════════════════════════════════════════════════
#  Single-series analyzer
# ═══════════════════════════════════════════════════════════════════════════

def _degenerate_summary() -> StatisticalSummary:
    return StatisticalSummary(
        mean=NAN,
        median=NAN,
        min=NAN,
        max=NAN,
        range=NAN,
        variance=NAN,
        standard_deviation=NAN,
        trend="increasing",
    )


def analyze_dataset_numbers(values: Sequence[Any] | None) -> StatisticalSummary:
    """Summarize a raw numeric series.

    Elements that do not coerce to a finite number are dropped.  With fewer
    than two survivors every field is NaN and the trend defaults to
    "increasing".
    """
    clean = finite_values(values)
    if len(clean) < 2:
        return _degenerate_summary()

    lo = min(clean)
    hi = max(clean)
    var = variance(clean)
    return StatisticalSummary(
        mean=mean(clean),
        median=median(clean),
        min=lo,
        max=hi,
        range=hi - lo,
        variance=var,
        standard_deviation=math.sqrt(var),
        trend="increasing" if clean[-1] >= clean[0] else "decreasing",
    )


def _or_zero(v: float) -> float:
    return 0.0 if math.isnan(v) else v


def compare_datasets(
    values_a: Sequence[Any] | None,
    values_b: Sequence[Any] | None,
) -> ComparisonResult:
    """Compare two raw series.

    Correlation is only attempted when the *filtered* series have the same
    length, so inputs of equal length can still yield ``correlation=None``
    once non-numeric entries are dropped.
    """
    a = finite_values(values_a)
    b = finite_values(values_b)
    summary_a = analyze_dataset_numbers(a)
    summary_b = analyze_dataset_numbers(b)

    more_volatile = (
        "A"
        if _or_zero(summary_a.standard_deviation) >= _or_zero(summary_b.standard_deviation)
        else "B"
    )
    return ComparisonResult(
        dataset_a=summary_a,
        dataset_b=summary_b,
        comparison=ComparisonDetails(
            mean_difference=summary_a.mean - summary_b.mean,
            median_difference=summary_a.median - summary_b.median,
            more_volatile=more_volatile,
            trend_relation="same" if summary_a.trend == summary_b.trend else "different",
            correlation=pearson_correlation(a, b) if len(a) == len(b) else None,
        ),
    )


# ═══════════════════════════════════════════════════════════════════════════
#  Rich analyzer (CSV text / pairs / records)
# ═══════════════════════════════════════════════════════════════════════════

def _rows_from_text(text: str) -> tuple[list[DataRow], list[str]] | AnalysisError:
    lines = [ln for ln in _LINE_SPLIT.split(text) if ln]
    if len(lines) < 2:
        return AnalysisError(error="Not enough data.")

    header, *rest = lines
    columns = [c.strip() for c in header.split(",")][:2]
    rows = []
    for line in rest:
        cells = line.split(",")
        x = cells[0].strip()
        y = to_number(cells[1]) if len(cells) > 1 else NAN
        rows.append(DataRow(x=x, y=y))
    return rows, columns


def _as_label(x: Any) -> str | int | float | None:
    if x is None or isinstance(x, (str, int, float)):
        return x
    if isinstance(x, pd.Timestamp):
        return x.isoformat()
    if hasattr(x, "item"):
        return x.item()     # numpy scalar → builtin
    return str(x)


def _rows_from_pairs(data: Sequence[Any]) -> list[DataRow]:
    rows = []
    for pair in data:
        pair = list(pair) if isinstance(pair, (list, tuple)) else []
        x = pair[0] if pair else None
        y = pair[1] if len(pair) > 1 else None
        rows.append(DataRow(x=_as_label(x), y=to_number(y)))
    return rows


def _rows_from_records(data: Sequence[Any]) -> list[DataRow]:
    rows = []
    for rec in data:
        rec = rec if isinstance(rec, dict) else {}
        rows.append(DataRow(x=_as_label(rec.get("x")), y=to_number(rec.get("y"))))
    return rows


def _rows_from_frame(frame: pd.DataFrame) -> tuple[list[DataRow], list[str]]:
    columns = [str(c) for c in frame.columns[:2]]
    if frame.shape[1] < 2:
        return [], columns
    rows = []
    for x, y in frame.iloc[:, :2].itertuples(index=False, name=None):
        rows.append(DataRow(x=_as_label(x), y=to_number(y)))
    return rows, columns


def _fixed(v: float) -> str:
    return "NaN" if math.isnan(v) else f"{v:.3f}"


def _label(x: Any) -> str:
    return format_number(x) if x is not None else "undefined"


def analyze_dataset_rich(data: Any) -> RichAnalysis | AnalysisError:
    """Analyze labelled rows from CSV text, (x, y) pairs or {x, y} records.

    Expected-bad input never raises; an ``AnalysisError`` describes why the
    data could not be analyzed.  Header names found in CSV text (or a
    DataFrame) are returned in ``columns``.
    """
    kind = classify_input(data)
    columns: list[str] | None = None

    if kind is InputKind.DELIMITED_TEXT:
        parsed = _rows_from_text(data)
        if isinstance(parsed, AnalysisError):
            return parsed
        rows, columns = parsed
    elif kind is InputKind.FRAME:
        if data.empty:
            return AnalysisError(error="Empty dataset.")
        rows, columns = _rows_from_frame(data)
    elif kind in (InputKind.PAIR_SEQUENCE, InputKind.RECORD_SEQUENCE, InputKind.SCALAR_SEQUENCE):
        data = list(data)
        if not data:
            return AnalysisError(error="Empty dataset.")
        if kind is InputKind.PAIR_SEQUENCE:
            rows = _rows_from_pairs(data)
        elif kind is InputKind.RECORD_SEQUENCE:
            rows = _rows_from_records(data)
        else:
            rows = []
    else:
        return AnalysisError(error="Unsupported data format.")

    if len(rows) < 2:
        return AnalysisError(error="Not enough data rows.")

    values = [r.y for r in rows if not math.isnan(r.y)]
    m = mean(values)
    med = median(values)
    var = variance(values)
    sd = standard_deviation(values)
    lo = min(values) if values else NAN
    hi = max(values) if values else NAN

    trend = "stable"
    if values and values[0] < values[-1]:
        trend = "increasing"
    elif values and values[0] > values[-1]:
        trend = "decreasing"

    anomalies = [r for r in rows if abs(r.y - m) > ANOMALY_SIGMAS * sd]

    # Placeholder only: no seasonal decomposition is attempted.
    patterns = []
    if len(rows) >= SEASONALITY_MIN_ROWS and columns and SEASONALITY_COLUMN.search(columns[0]):
        patterns.append(SEASONALITY_NOTE)

    value_name = columns[1] if columns and len(columns) > 1 else "Value"
    parts = [
        f"{value_name} shows a {trend} trend from {_label(rows[0].x)} to {_label(rows[-1].x)}.\n",
        f"Mean: {_fixed(m)}, Median: {_fixed(med)}, Min: {format_number(lo)}, "
        f"Max: {format_number(hi)}, Variance: {_fixed(var)}.\n",
    ]
    if anomalies:
        parts.append(f"Anomalies detected at: {', '.join(_label(a.x) for a in anomalies)}.\n")
    if patterns:
        parts.append(f"Patterns: {'; '.join(patterns)}\n")
    parts.append(CONTEXTUAL_INSIGHTS)

    return RichAnalysis(
        summary_statistics=SummaryStatistics(
            mean=m, median=med, min=lo, max=hi, variance=var, stddev=sd,
        ),
        trends=trend,
        anomalies=anomalies,
        patterns=patterns,
        contextual_insights=CONTEXTUAL_INSIGHTS,
        plain_text="".join(parts),
        columns=columns,
    )


# ═══════════════════════════════════════════════════════════════════════════
#  Public entry point
# ═══════════════════════════════════════════════════════════════════════════

def analyze_dataset(data: Any) -> StatisticalSummary | RichAnalysis | AnalysisError:
    """Route a plain numeric series to the numeric analyzer, anything else to the rich one."""
    kind = classify_input(data)
    log.debug("analyze_dataset: input classified as %s", kind.value)
    if kind is InputKind.SCALAR_SEQUENCE:
        return analyze_dataset_numbers(list(data))
    return analyze_dataset_rich(data)
