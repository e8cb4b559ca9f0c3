"""Free text → chronological two-column ``Year,Value`` CSV.

Each line is tried against three layouts, first match wins:

  1. strict     "2019 4.14%"
  2. two-cell   "2019,4.14" / "2019  4.14  (est.)"
  3. sentence   "In 2019 the rate was 4.14%"

Lines before the first match are preamble and are ignored.  Once a match has
been seen, every later non-empty line counts as "considered" whether or not it
parses.  If no line parses, the whole text is scanned for year/number pairs;
if that also fails a one-row placeholder dataset is returned.  The normalizer
never fails on text input.
"""

from __future__ import annotations

import logging

from chart_insights.models import NormalizedCSV, YearValueRow
from chart_insights.series import to_csv
from chart_insights.text.patterns import (
    GLOBAL_PAIR_PATTERN,
    NUMBER_TOKEN,
    SENTENCE_PATTERN,
    STRICT_LINE_PATTERN,
    YEAR_TOKEN,
)

log = logging.getLogger(__name__)

PLACEHOLDER_CSV = "Label,Value\nA,1"


def _clean_value(raw: str) -> str:
    return raw.replace("%", "").replace(",", ".").strip()


def _two_cell(line: str) -> tuple[str, str] | None:
    for cells in (line.split(","), line.split()):
        cells = [c.strip() for c in cells]
        if len(cells) < 2:
            continue
        if YEAR_TOKEN.fullmatch(cells[0]) and NUMBER_TOKEN.fullmatch(cells[1]):
            return cells[0], cells[1]
    return None


def _parse_line(line: str) -> tuple[str, str] | None:
    m = STRICT_LINE_PATTERN.match(line)
    if m:
        return m.group(1), m.group(2)

    cells = _two_cell(line)
    if cells:
        return cells

    m = SENTENCE_PATTERN.search(line)
    if m:
        return m.group(1), m.group(2)
    return None


def _finish(rows: list[YearValueRow], explanation: str, method: str) -> NormalizedCSV:
    ordered = sorted(rows, key=lambda r: int(r.year))
    csv = to_csv([r.year for r in ordered], [r.value for r in ordered])
    return NormalizedCSV(csv=csv, explanation=explanation, rows=ordered, method=method)


def normalize_text_to_two_column_csv(text: str) -> NormalizedCSV:
    """Extract (year, value) rows from free text and emit them as ``Year,Value`` CSV."""
    if not isinstance(text, str):
        raise TypeError(f"expected text, got {type(text).__name__}")

    rows: list[YearValueRow] = []
    started = False
    considered = 0

    for line in text.splitlines():
        if not line.strip():
            continue
        parsed = _parse_line(line)
        if parsed is None:
            if started:
                considered += 1
            continue
        started = True
        considered += 1
        year, value = parsed
        rows.append(YearValueRow(year=year, value=_clean_value(value)))

    if rows:
        return _finish(
            rows,
            f"Parsed {len(rows)} of {considered} lines as Year,Value rows.",
            "line_scan",
        )

    log.debug("No line matched a year/value layout; scanning whole text")
    for m in GLOBAL_PAIR_PATTERN.finditer(text):
        rows.append(YearValueRow(year=m.group(1), value=_clean_value(m.group(2))))

    if rows:
        return _finish(
            rows,
            f"No line matched a year/value layout; extracted {len(rows)} "
            f"Year,Value pairs by scanning the whole text.",
            "global_scan",
        )

    log.debug("No year/value pairs found; returning placeholder dataset")
    return NormalizedCSV(
        csv=PLACEHOLDER_CSV,
        explanation=(
            "Parsed 0 lines; no year/value pairs were found, "
            "so a placeholder dataset is returned."
        ),
        rows=[],
        method="placeholder",
    )
