#!/usr/bin/env python3
"""Standalone CLI to try the Chart Insights tools from the terminal.

Usage — run any of these from the project root:

  # Numeric summary of a series
  python test_tools.py analyze 1.12 1.14 1.18 1.05 1.08

  # Rich insights for a CSV file (header line + label,value rows)
  python test_tools.py analyze-csv data/eurusd.csv

  # Compare two series (separate them with "--")
  python test_tools.py compare 1 2 3 4 -- 2 4 6 8

  # Free text → Year,Value CSV (reads stdin when no file is given)
  python test_tools.py normalize notes.txt
  echo "2019 4.14%\n2020 3,90" | python test_tools.py normalize

  # Latest policy rates, or one series (needs RATE_HISTORY_PATH)
  python test_tools.py rates
  python test_tools.py rates refi 1Y

  # Configuration / health check
  python test_tools.py health
"""

from __future__ import annotations

import json
import sys
import os

# Ensure the src directory is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))


def _fmt(val, indent=2):
    """Pretty-print a value."""
    if isinstance(val, dict):
        return json.dumps(val, indent=indent, default=str)
    if isinstance(val, list):
        return json.dumps(val[:20], indent=indent, default=str)  # Cap at 20 items
    return str(val)


def _header(title: str):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def cmd_analyze(values: list[str]):
    """Numeric summary of the given values."""
    _header(f"Analyze: {len(values)} value(s)")
    from chart_insights.server import analyze_dataset_numbers
    print(_fmt(analyze_dataset_numbers(values)))


def cmd_analyze_csv(path: str):
    """Rich insights for a CSV file."""
    _header(f"Analyze CSV: {path}")
    from chart_insights.server import analyze_dataset
    with open(path, encoding="utf-8") as f:
        result = analyze_dataset(f.read())
    if "error" in result:
        print(f"  Error: {result['error']}")
        return
    print(result["plain_text"])
    print()
    print(_fmt(result["summary_statistics"]))


def cmd_compare(args: list[str]):
    """Compare two series separated by '--'."""
    if "--" not in args:
        print("  Separate the two series with '--'")
        return
    split = args.index("--")
    a, b = args[:split], args[split + 1:]
    _header(f"Compare: {len(a)} vs {len(b)} value(s)")
    from chart_insights.server import compare_datasets
    print(_fmt(compare_datasets(a, b)["comparison"]))


def cmd_normalize(path: str | None):
    """Free text → Year,Value CSV."""
    _header(f"Normalize: {path or 'stdin'}")
    from chart_insights.server import normalize_text
    if path:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()
    result = normalize_text(text)
    print(result["csv"])
    print(f"\n  {result['explanation']}  [{result['method']}]")


def cmd_rates(rate_type: str | None, range_key: str | None):
    """Latest rate cards, or one series."""
    from chart_insights.server import get_rate_history, get_rate_snapshot
    if not rate_type:
        _header("Policy rates — latest")
        result = get_rate_snapshot()
        if "error" in result:
            print(f"  Error: {result['error']}")
            return
        for s in result["snapshots"]:
            print(f"  {s['rate_type']:8s}  {s['value']}%  {s['trend']}")
        return

    _header(f"Policy rate: {rate_type} {range_key or ''}")
    result = get_rate_history(rate_type, range_key=range_key)
    if "error" in result:
        print(f"  Error: {result['error']}")
        return
    for label, value in zip(result["labels"][-24:], result["values"][-24:]):
        print(f"  {label}  {value}")
    print(f"\n  {_fmt(result['snapshot'])}")


def cmd_health():
    """Report configuration state."""
    _header("Health check")
    from chart_insights.config import get_config
    config = get_config()
    print(f"  Rate history : {config.rate_history_path or '(not set)'}")
    print(f"  Rate cutoff  : {config.rate_cutoff}")
    print(f"  Claude key   : {'set' if config.anthropic_api_key else '(not set)'}")
    print(f"  Model        : {config.narrative_model}")
    print(f"  HTTP port    : {config.port}")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(0)

    cmd = sys.argv[1].lower()
    args = sys.argv[2:]

    if cmd == "analyze":
        cmd_analyze(args)
    elif cmd == "analyze-csv" and args:
        cmd_analyze_csv(args[0])
    elif cmd == "compare":
        cmd_compare(args)
    elif cmd == "normalize":
        cmd_normalize(args[0] if args else None)
    elif cmd == "rates":
        cmd_rates(args[0] if args else None, args[1] if len(args) > 1 else None)
    elif cmd == "health":
        cmd_health()
    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
