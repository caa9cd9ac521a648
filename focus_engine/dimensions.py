"""Map time entries to the group they belong to along a reporting dimension."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from focus_engine.config import OTHER_COLOR
from focus_engine.schema import DIMENSIONS, TimeEntry

_WHITESPACE = re.compile(r"\s+")


def normalize_task_name(name: str) -> str:
    """Merge key for free-text task names: trimmed, single-spaced, case-folded."""

    return _WHITESPACE.sub(" ", (name or "").strip()).casefold()


@dataclass(frozen=True)
class GoalGroup:
    goal_id: str
    label: str
    color: Optional[str] = None

    @property
    def key(self) -> str:
        return f"goal:{self.goal_id}"


@dataclass(frozen=True)
class NoGoalGroup:
    label: str = "No goal"
    color: Optional[str] = OTHER_COLOR

    @property
    def key(self) -> str:
        return "goal:none"


@dataclass(frozen=True)
class TaskGroup:
    task_id: str
    label: str
    color: Optional[str] = None

    @property
    def key(self) -> str:
        return f"task:{self.task_id}"


@dataclass(frozen=True)
class TaskNameGroup:
    normalized_name: str
    label: str
    color: Optional[str] = None

    @property
    def key(self) -> str:
        return f"taskname:{self.normalized_name}"


@dataclass(frozen=True)
class CategoryGroup:
    category: str
    label: str
    color: Optional[str] = None

    @property
    def key(self) -> str:
        return f"category:{self.category}"


@dataclass(frozen=True)
class NoCategoryGroup:
    label: str = "Uncategorized"
    color: Optional[str] = None

    @property
    def key(self) -> str:
        return "category:none"


@dataclass(frozen=True)
class OtherGroup:
    """Synthetic overflow group for everything outside the top-N."""

    dimension: str
    label: str = "Other"
    color: Optional[str] = OTHER_COLOR

    @property
    def key(self) -> str:
        return f"{self.dimension}:other"


GroupInfo = Union[
    GoalGroup,
    NoGoalGroup,
    TaskGroup,
    TaskNameGroup,
    CategoryGroup,
    NoCategoryGroup,
    OtherGroup,
]


def _goal_group(entry: TimeEntry, neutral_color: str) -> GroupInfo:
    if entry.goal_id and entry.goal is not None and entry.goal.title:
        return GoalGroup(goal_id=entry.goal_id, label=entry.goal.title, color=entry.goal.color)
    return NoGoalGroup(color=neutral_color)


def _task_group(entry: TimeEntry) -> GroupInfo:
    if entry.task_id:
        return TaskGroup(task_id=entry.task_id, label=entry.task_title or entry.task_name)
    return TaskNameGroup(normalized_name=normalize_task_name(entry.task_name), label=(entry.task_name or "").strip())


def _category_group(entry: TimeEntry, category_labels: Optional[Mapping[str, str]]) -> GroupInfo:
    category = entry.category or (entry.goal.category if entry.goal is not None else None)
    if not category:
        return NoCategoryGroup()
    labels = category_labels or {}
    return CategoryGroup(category=category, label=labels.get(category, category))


def resolve_group(
    entry: TimeEntry,
    dimension: str,
    category_labels: Optional[Mapping[str, str]] = None,
    neutral_color: str = OTHER_COLOR,
) -> GroupInfo:
    """Resolve the group ``entry`` falls into for ``dimension``.

    Entries without a task id are merged by normalized task name, so
    ``"Email"`` and ``" email "`` land in the same group.
    """

    if dimension == "goal":
        return _goal_group(entry, neutral_color)
    if dimension == "task":
        return _task_group(entry)
    if dimension == "category":
        return _category_group(entry, category_labels)
    raise ValueError(f"Unknown dimension '{dimension}', expected one of {DIMENSIONS}")
