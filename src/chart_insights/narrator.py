"""Claude-powered narrative for dataset analyses.

Takes the structured output of the analyzers (a RichAnalysis or a
ComparisonResult) and asks the Anthropic Claude API for a short plain-English
explanation.  The analyzers themselves never call this module.
"""

from __future__ import annotations

import logging
import math

from chart_insights.config import get_config
from chart_insights.models import ComparisonResult, RichAnalysis, StatisticalSummary

log = logging.getLogger(__name__)

_client = None


def _get_client():
    """Lazy-init the Anthropic client."""
    global _client
    if _client is not None:
        return _client

    config = get_config()
    if not config.anthropic_api_key:
        raise ValueError(
            "ANTHROPIC_API_KEY is not set. "
            "Add it to your .env file to use the explain_dataset tool."
        )

    import anthropic
    _client = anthropic.Anthropic(api_key=config.anthropic_api_key)
    return _client


def _fmt_val(v: float | None) -> str:
    """Format a statistic for the prompt."""
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return "N/A"
    return f"{v:,.4g}"


def _summary_lines(title: str, s: StatisticalSummary) -> list[str]:
    return [
        f"{title}:",
        f"  mean: {_fmt_val(s.mean)}",
        f"  median: {_fmt_val(s.median)}",
        f"  min / max: {_fmt_val(s.min)} / {_fmt_val(s.max)}",
        f"  standard deviation: {_fmt_val(s.standard_deviation)}",
        f"  trend: {s.trend}",
    ]


def _build_data_section(result: RichAnalysis | ComparisonResult) -> str:
    """Format an analysis result into a readable block for the prompt."""
    parts: list[str] = []

    if isinstance(result, ComparisonResult):
        parts.extend(_summary_lines("SERIES A", result.dataset_a))
        parts.append("")
        parts.extend(_summary_lines("SERIES B", result.dataset_b))
        parts.append("")
        c = result.comparison
        parts.append("COMPARISON:")
        parts.append(f"  mean difference (A - B): {_fmt_val(c.mean_difference)}")
        parts.append(f"  median difference (A - B): {_fmt_val(c.median_difference)}")
        parts.append(f"  more volatile: {c.more_volatile}")
        parts.append(f"  trends: {c.trend_relation}")
        parts.append(f"  correlation: {_fmt_val(c.correlation)}")
        return "\n".join(parts)

    if result.columns:
        parts.append(f"Columns: {', '.join(result.columns)}")
    s = result.summary_statistics
    parts.append("SUMMARY STATISTICS:")
    for k, v in s.model_dump().items():
        parts.append(f"  {k}: {_fmt_val(v)}")
    parts.append(f"Trend: {result.trends}")
    if result.anomalies:
        parts.append("ANOMALIES (more than 2 standard deviations from the mean):")
        for a in result.anomalies:
            parts.append(f"  {a.x}: {_fmt_val(a.y)}")
    if result.patterns:
        parts.append("PATTERN NOTES:")
        for p in result.patterns:
            parts.append(f"  {p}")
    return "\n".join(parts)


SYSTEM_PROMPT = """\
You are an economist writing for an intelligent but non-technical audience.
Given descriptive statistics for a financial or economic time series, explain
in plain English what the numbers say.

Guidelines:
- Start with one sentence on the overall direction of the series.
- Use the actual numbers from the data; do NOT make up figures.
- Mention anomalies by their labels if any are listed.
- Treat pattern notes as hints that need checking, not as findings.
- Be concise — aim for 120-200 words, no headers.
"""


def explain_analysis(
    result: RichAnalysis | ComparisonResult,
    *,
    focus: str | None = None,
    model: str | None = None,
    max_tokens: int | None = None,
) -> str:
    """Generate a readable narrative for an analysis result.

    Args:
        result: output of analyze_dataset_rich() or compare_datasets()
        focus: optional focus area (e.g. "volatility", "recent trend")
        model: Claude model to use (defaults to config.narrative_model)
        max_tokens: max response tokens (defaults to config.narrative_max_tokens)

    Returns:
        Plain-text narrative string.
    """
    config = get_config()
    client = _get_client()

    data_text = _build_data_section(result)
    user_msg = f"Here is the analysis:\n\n{data_text}"
    if focus:
        user_msg += f"\n\nPlease focus especially on: {focus}"

    response = client.messages.create(
        model=model or config.narrative_model,
        max_tokens=max_tokens or config.narrative_max_tokens,
        system=SYSTEM_PROMPT,
        messages=[{"role": "user", "content": user_msg}],
    )

    text_parts = []
    for block in response.content:
        if hasattr(block, "text"):
            text_parts.append(block.text)

    log.debug("Narrative generated (%d blocks)", len(text_parts))
    return "\n".join(text_parts)
