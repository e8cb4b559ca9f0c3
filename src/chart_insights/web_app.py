"""Chart Insights — JSON API behind the charting front end.

The browser pages own the charts, tables and modals; this app only serves
the numbers they display:

  - dataset statistics and rich insights (numeric arrays, CSV, pairs, records)
  - two-series comparison
  - free-text → Year,Value CSV normalization
  - policy-rate series, latest-rate cards and ECB context eras
  - optional Claude narrative for an analysis

Run:  python -m chart_insights.web_app
Open: http://localhost:{PORT}/docs  (default 8877)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from chart_insights import rates
from chart_insights.analysis import analyze_dataset, analyze_dataset_rich, compare_datasets
from chart_insights.config import get_config
from chart_insights.models import AnalysisError, StatisticalSummary, json_ready
from chart_insights.series import series_snapshot, slice_range
from chart_insights.text.normalizer import normalize_text_to_two_column_csv

log = logging.getLogger(__name__)

app = FastAPI(title="Chart Insights")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeRequest(BaseModel):
    data: str | list[Any]


class CompareRequest(BaseModel):
    series_a: list[Any]
    series_b: list[Any]


class NormalizeRequest(BaseModel):
    text: str
    analyze: bool = False


class ExplainRequest(BaseModel):
    data: str | list[Any]
    focus: str | None = None


# ═══════════════════════════════════════════════════════════════════════════
#  Health check
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
async def health():
    """Health check endpoint."""
    config = get_config()
    return {
        "status": "ok",
        "rate_history": "configured" if config.rate_history_path else "unavailable",
        "narrative": "configured" if config.anthropic_api_key else "unavailable",
    }


# ═══════════════════════════════════════════════════════════════════════════
#  Dataset analysis
# ═══════════════════════════════════════════════════════════════════════════

@app.post("/api/analyze")
async def analyze(req: AnalyzeRequest) -> dict:
    """Statistics for a numeric series, or rich insights for labelled data.

    Unanalyzable data is not an HTTP error: the body is {"error": "..."} so
    the page can show "insights unavailable".
    """
    return json_ready(analyze_dataset(req.data))


@app.post("/api/compare")
async def compare(req: CompareRequest) -> dict:
    return json_ready(compare_datasets(req.series_a, req.series_b))


@app.post("/api/normalize")
async def normalize(req: NormalizeRequest) -> dict:
    """Free text → Year,Value CSV, optionally followed by the rich analysis."""
    normalized = normalize_text_to_two_column_csv(req.text)
    result: dict = {"normalized": json_ready(normalized)}
    if req.analyze:
        if normalized.method == "placeholder":
            result["analysis"] = {"error": "No year/value pairs found in text."}
        else:
            result["analysis"] = json_ready(analyze_dataset_rich(normalized.csv))
    return result


# ═══════════════════════════════════════════════════════════════════════════
#  Policy rates
# ═══════════════════════════════════════════════════════════════════════════

def _history() -> rates.RateHistory:
    try:
        return rates.get_history()
    except rates.RateHistoryError as exc:
        log.warning("Rate history unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc


def _check_type(history: rates.RateHistory, rate_type: str) -> None:
    if rate_type not in history:
        raise HTTPException(status_code=404, detail=f"Unknown rate type '{rate_type}'")


@app.get("/api/rates/{rate_type}")
async def rate_series(
    rate_type: str,
    year: str | None = None,
    range_key: str | None = Query(None, alias="range"),
):
    """Monthly series (cut off at the configured month), or a single year."""
    history = _history()
    _check_type(history, rate_type)
    config = get_config()

    if year:
        try:
            return json_ready(rates.year_window(history, rate_type, year, cutoff=config.rate_cutoff))
        except rates.RateHistoryError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    frame = rates.apply_cutoff(rates.history_frame(history, rate_type), config.rate_cutoff)
    labels, values = slice_range(list(frame["label"]), rates.frame_values(frame), range_key)
    return {
        "rate_type": rate_type,
        "name": rates.RATE_NAMES.get(rate_type, rate_type),
        "labels": labels,
        "values": values,
        "snapshot": json_ready(series_snapshot(values)),
    }


@app.get("/api/rates/{rate_type}/snapshot")
async def rate_snapshot(rate_type: str):
    """Latest value + trend arrow for a rate card."""
    history = _history()
    _check_type(history, rate_type)
    return json_ready(rates.latest_rate_and_trend(history, rate_type))


@app.get("/api/rates/{rate_type}/context")
async def rate_context(rate_type: str, label: str | None = None):
    """ECB policy eras over the plotted months (or just those covering ``label``)."""
    history = _history()
    _check_type(history, rate_type)
    frame = rates.apply_cutoff(rates.history_frame(history, rate_type), get_config().rate_cutoff)
    labels = list(frame["label"])
    windows = rates.periods_at(labels, label) if label else rates.context_windows(labels)
    return {"rate_type": rate_type, "periods": [json_ready(w) for w in windows]}


@app.get("/api/rates/{rate_type}/insights")
async def rate_insights(rate_type: str) -> dict:
    """Rich analysis of one rate series."""
    history = _history()
    _check_type(history, rate_type)
    csv = rates.rate_series_csv(history, rate_type, get_config().rate_cutoff)
    return json_ready(analyze_dataset_rich(csv))


# ═══════════════════════════════════════════════════════════════════════════
#  Narrative
# ═══════════════════════════════════════════════════════════════════════════

@app.post("/api/explain")
async def explain(req: ExplainRequest) -> dict:
    """Claude narrative for an analysis (503 when no API key is configured)."""
    from chart_insights.narrator import explain_analysis

    result = analyze_dataset(req.data)
    if isinstance(result, StatisticalSummary):
        result = analyze_dataset_rich([[i + 1, v] for i, v in enumerate(req.data)])
    if isinstance(result, AnalysisError):
        return {"error": result.error}

    try:
        narrative = explain_analysis(result, focus=req.focus)
    except ValueError as exc:
        log.warning("Narrative generation failed: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return {"narrative": narrative, "analysis": json_ready(result)}


if __name__ == "__main__":
    import uvicorn

    config = get_config()
    print(f"\n  Chart Insights → http://localhost:{config.port}\n")
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level.lower())
