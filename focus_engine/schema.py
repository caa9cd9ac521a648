"""Core data schema for time entries and the chart aggregates built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Optional

Granularity = Literal["day", "week", "month"]
Dimension = Literal["goal", "task", "category"]

GRANULARITIES: tuple[str, ...] = ("day", "week", "month")
DIMENSIONS: tuple[str, ...] = ("goal", "task", "category")


@dataclass(frozen=True)
class Goal:
    """Goal attached to a time entry."""

    id: str
    title: str
    color: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class TimeEntry:
    """Logged time interval, read-only input to every builder.

    ``calendar_date`` is the already-resolved day the entry belongs to and
    ``started_at`` is a local wall-clock timestamp; no time-zone conversion
    happens inside the engine.
    """

    id: str
    calendar_date: date
    duration_minutes: int
    task_name: str = ""
    started_at: Optional[datetime] = None
    task_id: Optional[str] = None
    task_title: Optional[str] = None
    goal_id: Optional[str] = None
    goal: Optional[Goal] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class PeriodRange:
    start_date: str
    end_date: str
    label: str
    days: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Stack:
    """One series stack: a selected group or the synthetic "Other" group."""

    key: str
    label: str
    color: str
    total_minutes: int

    def to_dict(self) -> dict:
        return {"key": self.key, "label": self.label, "color": self.color, "total_minutes": self.total_minutes}


@dataclass
class SeriesRow:
    bucket_key: str
    bucket_label: str
    values: dict[str, int]
    total_minutes: int

    def to_dict(self) -> dict:
        row: dict = {
            "bucket_key": self.bucket_key,
            "bucket_label": self.bucket_label,
            "total_minutes": self.total_minutes,
        }
        row.update(self.values)
        return row


@dataclass
class StackedSeries:
    """Bucket rows x stacks minute matrix ready for a stacked bar chart."""

    rows: list[SeriesRow]
    stacks: list[Stack]
    total_minutes: int

    def to_dict(self) -> dict:
        return {
            "data": [row.to_dict() for row in self.rows],
            "stacks": [stack.to_dict() for stack in self.stacks],
            "total_minutes": self.total_minutes,
        }


@dataclass(frozen=True)
class TrendPoint:
    bucket_key: str
    bucket_label: str
    minutes: int


@dataclass
class TrendSeries:
    points: list[TrendPoint]
    total_minutes: int

    def to_dict(self) -> dict:
        return {
            "data": [
                {"bucket_key": p.bucket_key, "bucket_label": p.bucket_label, "minutes": p.minutes}
                for p in self.points
            ],
            "total_minutes": self.total_minutes,
        }


@dataclass(frozen=True)
class CategorySlice:
    key: str
    label: str
    minutes: int


@dataclass(frozen=True)
class HourSegment:
    """Portion of one entry that falls inside a single calendar hour."""

    day: str
    hour: int
    minutes: int


@dataclass
class TimeGridItem:
    task_name: str
    minutes: int
    task_id: Optional[str] = None
    goal_id: Optional[str] = None
    goal_title: Optional[str] = None
    goal_color: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "task_name": self.task_name,
            "goal_id": self.goal_id,
            "goal_title": self.goal_title,
            "goal_color": self.goal_color,
            "minutes": self.minutes,
        }


@dataclass
class TimeGridCell:
    total_minutes: int = 0
    items: list[TimeGridItem] = field(default_factory=list)

    @property
    def dominant(self) -> Optional[TimeGridItem]:
        return self.items[0] if self.items else None

    def to_dict(self) -> dict:
        return {"total_minutes": self.total_minutes, "items": [item.to_dict() for item in self.items]}


@dataclass
class TimeGrid:
    """Day x hour matrix plus the counters for entries without a start time."""

    grid: dict[str, list[TimeGridCell]]
    excluded_minutes: int = 0
    excluded_entries: int = 0
    included_entries: int = 0

    def cell(self, day: str, hour: int) -> TimeGridCell:
        return self.grid[day][hour]

    def to_dict(self) -> dict:
        return {
            "grid": {day: [cell.to_dict() for cell in cells] for day, cells in self.grid.items()},
            "excluded_minutes": self.excluded_minutes,
            "excluded_entries": self.excluded_entries,
            "included_entries": self.included_entries,
        }


@dataclass(frozen=True)
class HistogramBin:
    hour: int
    label: str
    minutes: int


@dataclass
class Histogram:
    bins: list[HistogramBin]
    excluded_minutes: int = 0
    excluded_entries: int = 0
    included_entries: int = 0

    @property
    def minutes(self) -> list[int]:
        return [b.minutes for b in self.bins]

    def to_dict(self) -> dict:
        return {
            "data": [{"hour": b.hour, "label": b.label, "minutes": b.minutes} for b in self.bins],
            "excluded_minutes": self.excluded_minutes,
            "excluded_entries": self.excluded_entries,
            "included_entries": self.included_entries,
        }


@dataclass
class TaskTotal:
    task_key: str
    task_name: str
    total_minutes: int = 0
    goal_title: Optional[str] = None
    goal_color: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "task_key": self.task_key,
            "task_name": self.task_name,
            "total_minutes": self.total_minutes,
            "goal_title": self.goal_title,
            "goal_color": self.goal_color,
        }


@dataclass
class DayTaskTotals:
    date: str
    day_of_week: str
    total_minutes: int
    tasks: list[TaskTotal]

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "day_of_week": self.day_of_week,
            "total_minutes": self.total_minutes,
            "tasks": [task.to_dict() for task in self.tasks],
        }


@dataclass
class TaskTotalsByDay:
    """Per-day task totals, days ascending, tasks largest first."""

    days: list[DayTaskTotals]
    total_minutes: int
    unique_tasks: int

    def to_dict(self) -> dict:
        return {
            "data": [day.to_dict() for day in self.days],
            "total_minutes": self.total_minutes,
            "unique_tasks": self.unique_tasks,
        }
