"""Tests for the MCP tool functions.

The tools are plain functions registered with FastMCP, so they are called
directly here.  Every result must be JSON-ready: NaN comes back as None.
"""

import pytest

from chart_insights import config as config_module
from chart_insights import narrator, server


# --- Dataset analysis ---


def test_analyze_dataset_numbers_nan_becomes_none():
    result = server.analyze_dataset_numbers([1])
    assert result["mean"] is None
    assert result["standard_deviation"] is None
    assert result["trend"] == "increasing"


def test_analyze_dataset_csv():
    result = server.analyze_dataset("Year,Value\n2020,10\n2021,12")
    assert result["trends"] == "increasing"
    assert result["columns"] == ["Year", "Value"]
    assert result["summary_statistics"]["mean"] == 11


def test_analyze_dataset_error_dict():
    assert server.analyze_dataset("Year,Value\n2020,1") == {"error": "Not enough data rows."}


def test_compare_datasets():
    result = server.compare_datasets([1, 2, 3], [2, 4, 6])
    assert result["comparison"]["correlation"] == pytest.approx(1.0)
    assert result["comparison"]["more_volatile"] == "B"


def test_normalize_and_analyze():
    result = server.normalize_and_analyze("2019 1\n2020 2\n2021 4")
    assert result["normalized"]["method"] == "line_scan"
    assert result["analysis"]["trends"] == "increasing"


def test_normalize_and_analyze_without_pairs():
    result = server.normalize_and_analyze("nothing to see")
    assert result["normalized"]["csv"] == "Label,Value\nA,1"
    assert result["analysis"] == {"error": "No year/value pairs found in text."}


# --- Policy rates ---


def test_rate_snapshot_all_types(rate_history):
    result = server.get_rate_snapshot()
    assert [s["rate_type"] for s in result["snapshots"]] == ["refi", "deposit", "lending"]
    assert result["snapshots"][0]["value"] == 2.15


def test_rate_snapshot_unknown_type(rate_history):
    assert "Unknown rate type" in server.get_rate_snapshot("overnight")["error"]


def test_rate_history_full_series(rate_history):
    result = server.get_rate_history("refi")
    assert result["name"] == "Main Refinancing Rate"
    assert result["labels"][-1] == "2025-06"
    assert result["snapshot"] == {"open": 2.5, "high": 4.5, "low": 2.15, "close": 2.15}


def test_rate_history_range(rate_history):
    result = server.get_rate_history("refi", range_key="3M")
    assert result["labels"] == ["2024-12", "2025-03", "2025-06"]
    assert result["values"] == [3.15, 2.65, 2.15]


def test_rate_history_single_year(rate_history):
    result = server.get_rate_history("refi", year="2024")
    assert result["year"] == "2024"
    assert (result["previous_year"], result["next_year"]) == ("2023", "2025")


def test_rate_context(rate_history):
    periods = server.get_rate_context("refi")["periods"]
    assert [(p["start"], p["start_index"], p["end_index"]) for p in periods] == [
        ("2022-01", 0, 2),
        ("2024-01", 2, 7),
    ]

    hover = server.get_rate_context("refi", label="2024-06")["periods"]
    assert [p["start"] for p in hover] == ["2024-01"]


def test_analyze_rate_series(rate_history):
    result = server.analyze_rate_series("refi")
    assert result["columns"] == ["Month", "Rate"]
    assert result["trends"] == "decreasing"


def test_rate_tools_without_history(no_rate_history):
    for result in (
        server.get_rate_snapshot(),
        server.get_rate_history("refi"),
        server.get_rate_context(),
        server.analyze_rate_series("refi"),
    ):
        assert "RATE_HISTORY_PATH" in result["error"]


# --- Narrative ---


def test_explain_dataset_without_api_key(settings):
    result = server.explain_dataset([1, 2, 3])
    assert result.startswith("Could not generate narrative: ANTHROPIC_API_KEY")


def test_explain_dataset_bad_data(settings):
    assert server.explain_dataset([7]) == "Could not generate narrative: Not enough data rows."


def test_explain_dataset_with_client(fake_claude):
    result = server.explain_dataset([1, 2, 3], focus="volatility")
    assert result == "The series rose steadily."
    call = fake_claude.messages.calls[0]
    assert "Please focus especially on: volatility" in call["messages"][0]["content"]


@pytest.mark.integration
@pytest.mark.slow
def test_explain_dataset_live(monkeypatch):
    """Calls the real Claude API; needs ANTHROPIC_API_KEY."""
    monkeypatch.setattr(config_module, "_config", None)
    monkeypatch.setattr(narrator, "_client", None)
    if not config_module.get_config().anthropic_api_key:
        pytest.skip("ANTHROPIC_API_KEY not set")

    result = server.explain_dataset("Year,Value\n2020,1.1\n2021,1.3\n2022,1.2")
    assert result
    assert not result.startswith("Could not generate narrative")
