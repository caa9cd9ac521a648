"""Day x hour heat grid and 24-bin hourly histogram builders."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from focus_engine.distribution import distribute_entry_across_hours
from focus_engine.formatting import format_hour_label
from focus_engine.periods import DayLike, parse_day, to_date_only
from focus_engine.schema import Histogram, HistogramBin, TimeEntry, TimeGrid, TimeGridCell, TimeGridItem

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


def _day_keys(days: Iterable[DayLike]) -> list[str]:
    return [to_date_only(parse_day(day)) for day in days]


def build_time_grid(entries: list[TimeEntry], days: Iterable[DayLike]) -> TimeGrid:
    """Place every timed entry on a ``days`` x 24 hour grid.

    Each cell keeps its contributors keyed by ``(task_name, goal_id)``, sorted
    so the dominant one comes first. Segments falling on days outside ``days``
    are dropped. Entries without ``started_at`` touch no cell and are counted
    in ``excluded_minutes`` / ``excluded_entries``.
    """

    grid = {day: [TimeGridCell() for _ in range(HOURS_PER_DAY)] for day in _day_keys(days)}
    result = TimeGrid(grid=grid)

    lookup: dict[tuple[str, int], dict[tuple[str, Optional[str]], TimeGridItem]] = {}
    for entry in entries:
        if entry.started_at is None:
            result.excluded_minutes += entry.duration_minutes
            result.excluded_entries += 1
            continue

        result.included_entries += 1
        for segment in distribute_entry_across_hours(entry):
            cells = grid.get(segment.day)
            if cells is None:
                continue

            cell = cells[segment.hour]
            cell.total_minutes += segment.minutes

            items = lookup.setdefault((segment.day, segment.hour), {})
            item_key = (entry.task_name, entry.goal_id or None)
            item = items.get(item_key)
            if item is not None:
                item.minutes += segment.minutes
            else:
                item = TimeGridItem(
                    task_name=entry.task_name,
                    minutes=segment.minutes,
                    task_id=entry.task_id or None,
                    goal_id=entry.goal_id or None,
                    goal_title=entry.goal.title if entry.goal is not None else None,
                    goal_color=entry.goal.color if entry.goal is not None else None,
                )
                items[item_key] = item
                cell.items.append(item)

            # Ties keep the order left by the previous update.
            cell.items.sort(key=lambda item: item.minutes, reverse=True)

    logger.debug(
        "Time grid: %d days, %d included, %d excluded (%d min)",
        len(grid),
        result.included_entries,
        result.excluded_entries,
        result.excluded_minutes,
    )
    return result


def build_hourly_histogram(
    entries: list[TimeEntry],
    allowed_days: Optional[Iterable[DayLike]] = None,
) -> Histogram:
    """Collapse hour segments of all timed entries into 24 hour-of-day bins.

    With ``allowed_days`` only segments landing on one of those days count.
    """

    bins = np.zeros(HOURS_PER_DAY, dtype=np.int64)
    allowed = set(_day_keys(allowed_days)) if allowed_days is not None else None
    excluded_minutes = 0
    excluded_entries = 0
    included_entries = 0

    for entry in entries:
        if entry.started_at is None:
            excluded_minutes += entry.duration_minutes
            excluded_entries += 1
            continue

        included_entries += 1
        for segment in distribute_entry_across_hours(entry):
            if allowed is not None and segment.day not in allowed:
                continue
            bins[segment.hour] += segment.minutes

    return Histogram(
        bins=[
            HistogramBin(hour=hour, label=format_hour_label(hour), minutes=int(minutes))
            for hour, minutes in enumerate(bins)
        ],
        excluded_minutes=excluded_minutes,
        excluded_entries=excluded_entries,
        included_entries=included_entries,
    )
