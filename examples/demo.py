"""Demo script for focus-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from focus_engine.adapters.csv_adapter import parse
from focus_engine.formatting import format_duration, format_excluded_note
from focus_engine.grid import build_hourly_histogram
from focus_engine.periods import period_range
from focus_engine.series import build_stacked_series


def main() -> None:
    entries = parse("examples/sample_entries.csv")

    series = build_stacked_series(
        entries, granularity="week", dimension="goal", top_n=3, start_date="2024-03-04", end_date="2024-03-17"
    )
    print("Stacks:", [stack.label for stack in series.stacks])
    for row in series.rows:
        print(row.bucket_label, format_duration(row.total_minutes), row.values)

    week = period_range("week", now="2024-03-06")
    histogram = build_hourly_histogram(entries, allowed_days=week.days)
    busiest = max(histogram.bins, key=lambda b: b.minutes)
    print(f"{week.label}: busiest hour {busiest.label} ({format_duration(busiest.minutes)})")
    note = format_excluded_note(histogram.excluded_minutes, histogram.excluded_entries)
    if note:
        print(note)


if __name__ == "__main__":
    main()
