"""Pydantic models for analyzer, normalizer and rate-tool outputs."""

from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Numeric analysis
# ---------------------------------------------------------------------------

class StatisticalSummary(BaseModel):
    """Single-series summary.  NaN fields mean "not computable"."""
    mean: float
    median: float
    min: float
    max: float
    range: float
    variance: float
    standard_deviation: float
    trend: Literal["increasing", "decreasing"]


class ComparisonDetails(BaseModel):
    mean_difference: float          # A − B
    median_difference: float        # A − B
    more_volatile: Literal["A", "B"]
    trend_relation: Literal["same", "different"]
    correlation: float | None = None


class ComparisonResult(BaseModel):
    dataset_a: StatisticalSummary
    dataset_b: StatisticalSummary
    comparison: ComparisonDetails


# ---------------------------------------------------------------------------
# Rich (labelled) analysis
# ---------------------------------------------------------------------------

class DataRow(BaseModel):
    x: str | int | float | None = None
    y: float


class SummaryStatistics(BaseModel):
    mean: float
    median: float
    min: float
    max: float
    variance: float
    stddev: float


class RichAnalysis(BaseModel):
    summary_statistics: SummaryStatistics
    trends: Literal["increasing", "decreasing", "stable"]
    anomalies: list[DataRow] = []
    patterns: list[str] = []
    contextual_insights: str
    plain_text: str
    columns: list[str] | None = None    # header names, when the input carried any


class AnalysisError(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Text normalization
# ---------------------------------------------------------------------------

class YearValueRow(BaseModel):
    year: str
    value: str


class NormalizedCSV(BaseModel):
    csv: str
    explanation: str
    rows: list[YearValueRow] = []
    method: Literal["line_scan", "global_scan", "placeholder"]


# ---------------------------------------------------------------------------
# Series & policy-rate helpers
# ---------------------------------------------------------------------------

class SeriesSnapshot(BaseModel):
    """Open / high / low / close of a plotted series."""
    open: float
    high: float
    low: float
    close: float


class RateObservation(BaseModel):
    date: str                       # YYYY-MM-DD
    value: float | None = None


class RateSnapshot(BaseModel):
    rate_type: str
    value: float | None = None
    previous: float | None = None
    trend: str


class YearWindow(BaseModel):
    rate_type: str
    year: str
    labels: list[str]
    values: list[float | None]
    previous_year: str | None = None
    next_year: str | None = None


class ContextPeriod(BaseModel):
    label: str
    start: str                      # YYYY-MM, inclusive
    end: str                        # YYYY-MM, inclusive
    description: str


class ContextWindow(ContextPeriod):
    start_index: int
    end_index: int                  # exclusive


def json_ready(model: BaseModel) -> dict:
    """Dump for JSON transport: NaN and infinities become null."""
    return json.loads(model.model_dump_json())
