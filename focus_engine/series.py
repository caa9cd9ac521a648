"""Bucketed time series: stacked by dimension, plain trend, category split, per-day tasks."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Mapping, Optional, Sequence

from focus_engine.config import DEFAULT_PALETTE, OTHER_COLOR
from focus_engine.dimensions import GroupInfo, resolve_group
from focus_engine.periods import DayLike, bucket_label, derive_bucket_key, enumerate_buckets, parse_day, to_date_only
from focus_engine.ranking import select_top_groups
from focus_engine.schema import (
    CategorySlice,
    DayTaskTotals,
    SeriesRow,
    StackedSeries,
    TaskTotal,
    TaskTotalsByDay,
    TimeEntry,
    TrendPoint,
    TrendSeries,
)

logger = logging.getLogger(__name__)


def _bucket_keys(
    observed: Iterable[str],
    granularity: str,
    start_date: Optional[DayLike],
    end_date: Optional[DayLike],
) -> list[str]:
    if start_date is not None and end_date is not None:
        return enumerate_buckets(granularity, start_date, end_date)
    return sorted(set(observed))


def build_stacked_series(
    entries: list[TimeEntry],
    granularity: str,
    dimension: str,
    top_n: int,
    start_date: Optional[DayLike] = None,
    end_date: Optional[DayLike] = None,
    category_labels: Optional[Mapping[str, str]] = None,
    palette: Sequence[str] = DEFAULT_PALETTE,
    other_color: str = OTHER_COLOR,
) -> StackedSeries:
    """Build a zero-filled bucket x group minute matrix for a stacked chart.

    When both ``start_date`` and ``end_date`` are given every bucket of the
    range appears, even empty ones. Otherwise only observed buckets are
    returned, in ascending order. Groups beyond ``top_n`` are summed into a
    single "Other" stack per row. Groups without their own color take one
    from ``palette`` by rank; "Other" and "No goal" use ``other_color``.
    """

    matrix: dict[str, dict[str, int]] = defaultdict(dict)
    group_totals: dict[str, int] = {}
    group_meta: dict[str, GroupInfo] = {}
    total_minutes = 0

    for entry in entries:
        bucket = derive_bucket_key(entry.calendar_date, granularity)
        group = resolve_group(entry, dimension, category_labels, neutral_color=other_color)
        key = group.key

        total_minutes += entry.duration_minutes
        group_meta[key] = group
        group_totals[key] = group_totals.get(key, 0) + entry.duration_minutes
        cell = matrix[bucket]
        cell[key] = cell.get(key, 0) + entry.duration_minutes

    buckets = _bucket_keys(matrix.keys(), granularity, start_date, end_date)
    ranking = select_top_groups(
        group_totals, top_n, dimension, group_meta, palette=palette, other_color=other_color
    )
    overflow = set(ranking.overflow_keys)

    rows: list[SeriesRow] = []
    for bucket in buckets:
        bucket_groups = matrix.get(bucket, {})
        values = {key: bucket_groups.get(key, 0) for key in ranking.selected_keys}
        if ranking.other is not None:
            values[ranking.other.key] = sum(
                minutes for key, minutes in bucket_groups.items() if key in overflow
            )
        rows.append(
            SeriesRow(
                bucket_key=bucket,
                bucket_label=bucket_label(bucket, granularity),
                values=values,
                total_minutes=sum(values.values()),
            )
        )

    logger.debug(
        "Stacked series: %d entries, %d buckets, %d groups, %d stacks",
        len(entries),
        len(rows),
        len(group_totals),
        len(ranking.stacks),
    )
    return StackedSeries(rows=rows, stacks=ranking.stacks, total_minutes=total_minutes)


def build_trend_series(
    entries: list[TimeEntry],
    granularity: str,
    start_date: Optional[DayLike] = None,
    end_date: Optional[DayLike] = None,
) -> TrendSeries:
    """Total minutes per bucket, without a dimension split."""

    bucket_totals: dict[str, int] = defaultdict(int)
    total_minutes = 0
    for entry in entries:
        bucket_totals[derive_bucket_key(entry.calendar_date, granularity)] += entry.duration_minutes
        total_minutes += entry.duration_minutes

    points = [
        TrendPoint(bucket_key=bucket, bucket_label=bucket_label(bucket, granularity), minutes=bucket_totals.get(bucket, 0))
        for bucket in _bucket_keys(bucket_totals.keys(), granularity, start_date, end_date)
    ]
    return TrendSeries(points=points, total_minutes=total_minutes)


def build_category_breakdown(
    entries: list[TimeEntry],
    category_labels: Optional[Mapping[str, str]] = None,
) -> list[CategorySlice]:
    """Minutes per category, largest first; ties keep first-seen order."""

    totals: dict[str, int] = {}
    labels: dict[str, str] = {}
    for entry in entries:
        group = resolve_group(entry, "category", category_labels)
        totals[group.key] = totals.get(group.key, 0) + entry.duration_minutes
        labels[group.key] = group.label

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategorySlice(key=key, label=labels[key], minutes=minutes) for key, minutes in ranked]


def build_task_totals_by_day(entries: list[TimeEntry]) -> TaskTotalsByDay:
    """Minutes per task for every day that has entries.

    Tasks are merged with the same key as the task dimension, so untracked
    names differing only in case or spacing share one row. Name and goal come
    from the first entry seen for the task on that day.
    """

    days: dict[str, dict[str, TaskTotal]] = {}
    unique_keys: set[str] = set()
    total_minutes = 0

    for entry in entries:
        day = to_date_only(parse_day(entry.calendar_date))
        key = resolve_group(entry, "task").key
        tasks = days.setdefault(day, {})
        task = tasks.get(key)
        if task is None:
            task = TaskTotal(
                task_key=key,
                task_name=entry.task_title or entry.task_name,
                goal_title=entry.goal.title if entry.goal is not None else None,
                goal_color=entry.goal.color if entry.goal is not None else None,
            )
            tasks[key] = task
        task.total_minutes += entry.duration_minutes
        unique_keys.add(key)
        total_minutes += entry.duration_minutes

    result = []
    for day in sorted(days):
        tasks = sorted(days[day].values(), key=lambda task: task.total_minutes, reverse=True)
        result.append(
            DayTaskTotals(
                date=day,
                day_of_week=parse_day(day).strftime("%A"),
                total_minutes=sum(task.total_minutes for task in tasks),
                tasks=tasks,
            )
        )

    return TaskTotalsByDay(days=result, total_minutes=total_minutes, unique_tasks=len(unique_keys))
