"""Chart-Insights: MCP server for dataset statistics and policy-rate insights.

Tool hierarchy
──────────────
  Dataset analysis
    1. analyze_dataset          — numeric series → summary; CSV/pairs/records → rich insights
    2. analyze_dataset_numbers  — numeric summary only (never errors)
    3. compare_datasets         — two numeric series side by side + correlation

  Text
    4. normalize_text           — free text → Year,Value CSV
    5. normalize_and_analyze    — free text → CSV → rich insights

  Policy rates (needs RATE_HISTORY_PATH)
    6. get_rate_snapshot        — latest value + trend per rate type
    7. get_rate_history         — flattened series, one year, or a trailing range
    8. get_rate_context         — ECB policy eras over the plotted months
    9. analyze_rate_series      — rich insights for one rate series

  Narrative (Claude-powered)
   10. explain_dataset          — readable explanation of an analysis
"""

from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP

from chart_insights import rates
from chart_insights.analysis import (
    analyze_dataset as _analyze_dataset,
    analyze_dataset_numbers as _analyze_numbers,
    analyze_dataset_rich,
    compare_datasets as _compare_datasets,
)
from chart_insights.config import get_config
from chart_insights.models import AnalysisError, StatisticalSummary, json_ready
from chart_insights.series import series_snapshot, slice_range
from chart_insights.text.normalizer import normalize_text_to_two_column_csv

log = logging.getLogger(__name__)

mcp = FastMCP(name="Chart-Insights")


# ═══════════════════════════════════════════════════════════════════════════
#  DATASET ANALYSIS
# ═══════════════════════════════════════════════════════════════════════════


def analyze_dataset(data: str | list[Any]) -> dict:
    """Analyze a dataset and return descriptive statistics.

    Accepts:
      - a list of numbers (e.g. [1.2, 1.4, 1.1]) → mean, median, min, max,
        range, variance, standard_deviation, trend
      - CSV text with a header line (e.g. "Year,Value\\n2020,1.1\\n2021,1.2")
      - a list of [x, y] pairs or {x, y} records

    CSV / pair / record input also returns anomalies (values more than two
    standard deviations from the mean) and a plain-text narrative.  When the
    data cannot be analyzed the result is {"error": "..."}.
    """
    return json_ready(_analyze_dataset(data))


def analyze_dataset_numbers(values: list[Any]) -> dict:
    """Summarize a numeric series.

    Non-numeric entries are dropped.  With fewer than two usable values all
    statistics are null and the trend is "increasing".
    """
    return json_ready(_analyze_numbers(values))


def compare_datasets(series_a: list[Any], series_b: list[Any]) -> dict:
    """Compare two numeric series.

    Returns a summary of each plus mean/median differences (A − B), which
    series is more volatile, whether trends match, and the Pearson
    correlation (null unless both cleaned series have the same length).
    """
    return json_ready(_compare_datasets(series_a, series_b))


# ═══════════════════════════════════════════════════════════════════════════
#  TEXT
# ═══════════════════════════════════════════════════════════════════════════


def normalize_text(text: str) -> dict:
    """Turn free text (notes, pasted tables, sentences) into Year,Value CSV.

    Returns csv, an explanation of how many lines were parsed, the extracted
    rows, and which method succeeded (line_scan, global_scan, placeholder).
    """
    return json_ready(normalize_text_to_two_column_csv(text))


def normalize_and_analyze(text: str) -> dict:
    """Extract Year,Value rows from free text, then run the rich analysis on them."""
    normalized = normalize_text_to_two_column_csv(text)
    if normalized.method == "placeholder":
        analysis = AnalysisError(error="No year/value pairs found in text.")
    else:
        analysis = analyze_dataset_rich(normalized.csv)
    return {"normalized": json_ready(normalized), "analysis": json_ready(analysis)}


# ═══════════════════════════════════════════════════════════════════════════
#  POLICY RATES
# ═══════════════════════════════════════════════════════════════════════════


def get_rate_snapshot(rate_type: str | None = None) -> dict:
    """Latest published policy rate and its direction.

    rate_type: 'refi', 'deposit' or 'lending'.  None returns all three.
    """
    try:
        history = rates.get_history()
        types = [rate_type] if rate_type else [t for t in rates.RATE_TYPES if t in history]
        snapshots = [json_ready(rates.latest_rate_and_trend(history, t)) for t in types]
    except rates.RateHistoryError as exc:
        return {"error": str(exc)}
    return {"snapshots": snapshots}


def get_rate_history(
    rate_type: str,
    year: str | None = None,
    range_key: str | None = None,
) -> dict:
    """Policy-rate observations for plotting.

    Args:
        rate_type: 'refi', 'deposit' or 'lending'
        year: a single year (e.g. '2024'); returns that year's observations
            with previous/next year for navigation
        range_key: '1M', '3M', '1Y' or '5Y' to keep only the trailing points

    Without ``year`` the full monthly series is returned (YYYY-MM labels),
    hidden from the configured cutoff month onward, with open/high/low/close.
    """
    config = get_config()
    try:
        history = rates.get_history()
        if year:
            return json_ready(rates.year_window(history, rate_type, year, cutoff=config.rate_cutoff))
        frame = rates.apply_cutoff(rates.history_frame(history, rate_type), config.rate_cutoff)
    except rates.RateHistoryError as exc:
        return {"error": str(exc)}

    labels, values = slice_range(list(frame["label"]), rates.frame_values(frame), range_key)
    return {
        "rate_type": rate_type,
        "name": rates.RATE_NAMES.get(rate_type, rate_type),
        "labels": labels,
        "values": values,
        "snapshot": json_ready(series_snapshot(values)),
    }


def get_rate_context(rate_type: str = "refi", label: str | None = None) -> dict:
    """ECB policy eras overlapping the plotted rate history.

    With ``label`` (a YYYY-MM month) only the eras covering that month are
    returned, which is what a chart hover shows.
    """
    config = get_config()
    try:
        frame = rates.apply_cutoff(
            rates.history_frame(rates.get_history(), rate_type), config.rate_cutoff
        )
    except rates.RateHistoryError as exc:
        return {"error": str(exc)}

    labels = list(frame["label"])
    if label:
        windows = rates.periods_at(labels, label)
    else:
        windows = rates.context_windows(labels)
    return {"rate_type": rate_type, "periods": [json_ready(w) for w in windows]}


def analyze_rate_series(rate_type: str) -> dict:
    """Rich statistics (trend, anomalies, narrative) for one policy-rate series."""
    try:
        csv = rates.rate_series_csv(rates.get_history(), rate_type, get_config().rate_cutoff)
    except rates.RateHistoryError as exc:
        return {"error": str(exc)}
    return json_ready(analyze_dataset_rich(csv))


# ═══════════════════════════════════════════════════════════════════════════
#  NARRATIVE (Claude-powered readable explanations)
# ═══════════════════════════════════════════════════════════════════════════


def explain_dataset(
    data: str | list[Any],
    focus: str | None = None,
) -> str:
    """Get a readable, plain-English explanation of a dataset.

    Runs the same analysis as analyze_dataset, then uses Claude to describe
    the trend, spread and any anomalies.

    Args:
        data: CSV text, [x, y] pairs, {x, y} records, or a list of numbers
        focus: optional focus area (e.g. 'volatility', 'recent trend')

    Requires ANTHROPIC_API_KEY in .env.
    """
    from chart_insights.narrator import explain_analysis

    result = _analyze_dataset(data)
    if isinstance(result, AnalysisError):
        return f"Could not generate narrative: {result.error}"
    if isinstance(result, StatisticalSummary):
        labelled = [[i + 1, v] for i, v in enumerate(data)]
        result = analyze_dataset_rich(labelled)
        if isinstance(result, AnalysisError):
            return f"Could not generate narrative: {result.error}"

    try:
        return explain_analysis(result, focus=focus)
    except ValueError as exc:
        return f"Could not generate narrative: {exc}"


for _tool in (
    analyze_dataset,
    analyze_dataset_numbers,
    compare_datasets,
    normalize_text,
    normalize_and_analyze,
    get_rate_snapshot,
    get_rate_history,
    get_rate_context,
    analyze_rate_series,
    explain_dataset,
):
    mcp.tool(_tool)


# ═══════════════════════════════════════════════════════════════════════════
#  ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    import sys

    # Support SSE transport for remote hosting:
    #   python -m chart_insights.server --sse
    # Default is STDIO (for Claude Desktop / Cursor / local MCP clients)
    if "--sse" in sys.argv:
        mcp.run(transport="sse")
    else:
        mcp.run()
