"""Streamlit demo UI for focus-engine."""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path
from typing import Any

from focus_engine.adapters import csv_adapter, json_adapter
from focus_engine.config import get_settings
from focus_engine.formatting import format_duration, format_excluded_note, format_hour_label
from focus_engine.grid import build_hourly_histogram, build_time_grid
from focus_engine.periods import period_range, rolling_range
from focus_engine.schema import DIMENSIONS, GRANULARITIES
from focus_engine.series import build_category_breakdown, build_stacked_series


def _parse_entries_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_entries_from_path(temp_path)


def run_engine(entries: list, granularity: str, dimension: str, top_n: int, offset: int, today: date) -> dict[str, Any]:
    """Run all builders and return a UI-friendly result payload."""

    settings = get_settings()
    trend_range = rolling_range(granularity, offset=offset, now=today)
    grid_range = period_range("week", offset=offset, now=today)

    series = build_stacked_series(
        entries,
        granularity=granularity,
        dimension=dimension,
        top_n=top_n,
        start_date=trend_range.start_date,
        end_date=trend_range.end_date,
        palette=settings.palette,
        other_color=settings.other_color,
    )
    grid = build_time_grid(entries, grid_range.days)
    histogram = build_hourly_histogram(entries, allowed_days=grid_range.days)

    return {
        "trend_range": trend_range,
        "grid_range": grid_range,
        "series": series,
        "grid": grid,
        "histogram": histogram,
        "categories": build_category_breakdown(entries),
    }


def _column_names(stacks) -> dict[str, str]:
    """Chart column per stack key; labels only when no two stacks share one."""

    labels = [stack.label for stack in stacks]
    if len(set(labels)) == len(labels) and "bucket" not in labels:
        return {stack.key: stack.label for stack in stacks}
    return {stack.key: stack.key for stack in stacks}


def _series_table(series) -> list[dict[str, Any]]:
    columns = _column_names(series.stacks)
    table = []
    for row in series.rows:
        record: dict[str, Any] = {"bucket": row.bucket_label}
        record.update({columns[key]: minutes for key, minutes in row.values.items()})
        table.append(record)
    return table


def _grid_table(grid) -> list[dict[str, Any]]:
    table = []
    for day, cells in grid.grid.items():
        record: dict[str, Any] = {"day": day}
        for hour, cell in enumerate(cells):
            record[format_hour_label(hour)] = cell.total_minutes
        table.append(record)
    return table


def main() -> None:
    import streamlit as st

    settings = get_settings()

    st.set_page_config(page_title="Focus Engine Demo", layout="wide")
    st.title("Focus Engine: Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload time entries", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        granularity = st.selectbox("Granularity", options=list(GRANULARITIES), index=1)
        dimension = st.selectbox("Group by", options=list(DIMENSIONS), index=0)
        top_n = st.number_input("Top N", min_value=1, max_value=20, value=settings.default_top_n, step=1)
        today = st.date_input("Today", value=date(2024, 3, 13))
        offset = st.number_input("Offset (periods back)", min_value=-24, max_value=0, value=0, step=1)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            entries = csv_adapter.parse("examples/sample_entries.csv")
            data_source = "demo dataset (examples/sample_entries.csv)"
        elif uploaded is not None:
            entries = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        if not entries:
            st.error("No time entries were found in the selected input.")
            return

        result = run_engine(entries, granularity, dimension, int(top_n), int(offset), today)
        st.success(f"Loaded {len(entries)} entries from {data_source}.")

        series = result["series"]
        st.subheader(f"A) Time by {dimension}: {result['trend_range'].label}")
        st.metric("Total", format_duration(series.total_minutes))
        table = _series_table(series)
        if series.stacks:
            st.bar_chart(table, x="bucket", y=list(_column_names(series.stacks).values()))
        st.table(table)

        st.subheader(f"B) Time grid: {result['grid_range'].label}")
        grid = result["grid"]
        st.dataframe(_grid_table(grid))
        note = format_excluded_note(grid.excluded_minutes, grid.excluded_entries)
        if note:
            st.caption(note)

        st.subheader("C) Hourly distribution")
        histogram = result["histogram"]
        st.bar_chart([{"hour": b.label, "minutes": b.minutes} for b in histogram.bins], x="hour", y="minutes")

        st.subheader("D) Categories")
        st.table([{"category": c.label, "time": format_duration(c.minutes)} for c in result["categories"]])

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
