"""Build a focus report from a CSV/JSON time-entry file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from focus_engine.adapters import csv_adapter, json_adapter
from focus_engine.config import ConfigError, load_settings
from focus_engine.report import ReportRequest, build_focus_report
from focus_engine.schema import DIMENSIONS, GRANULARITIES


def _load_entries(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Build focus-time chart aggregates")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON time entries file")
    parser.add_argument("--granularity", choices=GRANULARITIES, default="week")
    parser.add_argument("--group-by", dest="dimension", choices=DIMENSIONS, default="goal")
    parser.add_argument("--top-n", type=int, default=None, help="Groups shown before folding into 'Other'")
    parser.add_argument("--start", default=None, help="First day of the range (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="Last day of the range (YYYY-MM-DD)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: FOCUS_ENGINE_LOG_LEVEL or WARNING)")
    parser.add_argument("--output", default=None, help="Optional path to also write the report JSON")
    args = parser.parse_args()

    try:
        settings = load_settings()
    except ConfigError as exc:
        parser.error(str(exc))

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if (args.start is None) != (args.end is None):
        parser.error("--start and --end must be given together")

    try:
        entries = _load_entries(Path(args.data))
        request = ReportRequest(
            granularity=args.granularity,
            dimension=args.dimension,
            top_n=args.top_n,
            start_date=args.start,
            end_date=args.end,
        )
        report = build_focus_report(entries, request, settings)
    except ValueError as exc:
        parser.error(str(exc))

    print(json.dumps(report, indent=2))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"Saved report to {out_path}")


if __name__ == "__main__":
    main()
