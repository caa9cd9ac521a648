"""Run every builder for one report request and return a JSON-ready payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from focus_engine.config import EngineSettings, get_settings
from focus_engine.formatting import format_duration, format_excluded_note
from focus_engine.grid import build_hourly_histogram, build_time_grid
from focus_engine.periods import DayLike, enumerate_buckets, parse_day, to_date_only
from focus_engine.schema import TimeEntry
from focus_engine.series import (
    build_category_breakdown,
    build_stacked_series,
    build_task_totals_by_day,
    build_trend_series,
)

logger = logging.getLogger(__name__)


@dataclass
class ReportRequest:
    """Parameters of one report.

    ``days`` is the day axis of the time grid; when empty it is derived from
    ``start_date``/``end_date``. ``top_n`` falls back to the configured default.
    """

    granularity: str = "week"
    dimension: str = "goal"
    top_n: Optional[int] = None
    start_date: Optional[DayLike] = None
    end_date: Optional[DayLike] = None
    days: list[DayLike] = field(default_factory=list)
    category_labels: Optional[Mapping[str, str]] = None


def _grid_days(request: ReportRequest, entries: list[TimeEntry]) -> list[str]:
    if request.days:
        return [to_date_only(parse_day(day)) for day in request.days]
    if request.start_date is not None and request.end_date is not None:
        return enumerate_buckets("day", request.start_date, request.end_date)
    return sorted({to_date_only(entry.calendar_date) for entry in entries})


def build_focus_report(
    entries: list[TimeEntry],
    request: ReportRequest,
    settings: Optional[EngineSettings] = None,
) -> dict:
    """Build series, task, grid and histogram aggregates for ``entries``."""

    settings = settings or get_settings()
    top_n = request.top_n if request.top_n is not None else settings.default_top_n

    series = build_stacked_series(
        entries,
        granularity=request.granularity,
        dimension=request.dimension,
        top_n=top_n,
        start_date=request.start_date,
        end_date=request.end_date,
        category_labels=request.category_labels,
        palette=settings.palette,
        other_color=settings.other_color,
    )
    trend = build_trend_series(entries, request.granularity, request.start_date, request.end_date)
    categories = build_category_breakdown(entries, request.category_labels)
    task_totals = build_task_totals_by_day(entries)

    days = _grid_days(request, entries)
    grid = build_time_grid(entries, days)
    histogram = build_hourly_histogram(entries, allowed_days=days)

    logger.debug(
        "Report built: %d entries, granularity=%s, dimension=%s, top_n=%d",
        len(entries),
        request.granularity,
        request.dimension,
        top_n,
    )

    return {
        "summary": {
            "total_entries": len(entries),
            "total_minutes": series.total_minutes,
            "total_formatted": format_duration(series.total_minutes),
            "excluded_note": format_excluded_note(grid.excluded_minutes, grid.excluded_entries),
        },
        "stacked_series": series.to_dict(),
        "trend": trend.to_dict(),
        "categories": [
            {"key": item.key, "label": item.label, "minutes": item.minutes} for item in categories
        ],
        "time_grid": grid.to_dict(),
        "histogram": histogram.to_dict(),
        "task_totals": task_totals.to_dict(),
    }
