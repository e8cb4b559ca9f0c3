"""Regex patterns for pulling (year, value) pairs out of free text."""

from __future__ import annotations

import re

# Signed decimal with 1–3 integer digits, "." or "," as the decimal separator.
# Must not be glued to a preceding word/number or followed by another digit.
NUMBER = r"(?<![\w.,])[-+]?\d{1,3}(?:[.,]\d+)?(?!\d)"

# "2019 4.14%": the whole line is a year, whitespace, a number and an optional %
STRICT_LINE_PATTERN = re.compile(rf"^\s*(\d{{4}})\s+({NUMBER})\s*%?\s*$")

# Cell checks for "2019,4.14,..." or "2019  4.14  (est)"
YEAR_TOKEN = re.compile(r"\d{4}")
NUMBER_TOKEN = re.compile(r"[-+]?\d{1,3}(?:[.,]\d+)?%?")

# "In 2019 the deposit rate stood at -0.5%": a plausible year, then later a number
SENTENCE_PATTERN = re.compile(rf"\b((?:19|20)\d{{2}})\b.*?({NUMBER})\s*%?")

# Whole-text fallback: a year and the next number token, even across newlines
GLOBAL_PAIR_PATTERN = re.compile(rf"\b((?:19|20)\d{{2}})\b[^\d]*?({NUMBER})", re.DOTALL)
