"""Shared fixtures: a small policy-rate history and isolated settings."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from chart_insights import config as config_module
from chart_insights import narrator, rates
from chart_insights.config import Settings

SAMPLE_HISTORY = {
    "refi": {
        "2024": [
            {"date": "2024-06-12", "value": 4.25},
            {"date": "2024-09-18", "value": 3.65},
            {"date": "2024-12-18", "value": 3.15},
        ],
        "2023": [
            {"date": "2023-01-01", "value": 2.5},
            {"date": "2023-09-20", "value": 4.5},
        ],
        "2025": [
            {"date": "2025-03-12", "value": 2.65},
            {"date": "2025-06-11", "value": 2.15},
            {"date": "2025-07-23", "value": None},
            {"date": "2025-09-10", "value": 2.15},
        ],
    },
    "deposit": {
        "2024": [
            {"date": "2024-01-01", "value": 4.0},
            {"date": "2024-06-12", "value": 3.75},
        ],
    },
    "lending": {
        "2022": [{"date": "2022-07-27", "value": 0.75}],
        "2023": [{"date": "2023-02-08", "value": 3.25}],
    },
}


@pytest.fixture
def settings(monkeypatch):
    """Fresh settings with no API key and the default cutoff."""
    s = Settings(anthropic_api_key="", rate_history_path="", rate_cutoff="2025-07")
    monkeypatch.setattr(config_module, "_config", s)
    monkeypatch.setattr(narrator, "_client", None)
    return s


@pytest.fixture
def rate_history(monkeypatch, settings):
    """Install SAMPLE_HISTORY as the shared rate history."""
    history = rates.parse_history(SAMPLE_HISTORY)
    monkeypatch.setattr(rates, "_history", history)
    settings.rate_history_path = "sample.json"
    return history


@pytest.fixture
def no_rate_history(monkeypatch, settings):
    monkeypatch.setattr(rates, "_history", None)
    return settings


class FakeMessages:
    def __init__(self, reply: str):
        self.reply = reply
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.reply)])


@pytest.fixture
def fake_claude(monkeypatch, settings):
    """Replace the Anthropic client with one that returns a canned reply."""
    client = SimpleNamespace(messages=FakeMessages("The series rose steadily."))
    monkeypatch.setattr(narrator, "_client", client)
    return client
