"""CSV adapter for time entries."""

from __future__ import annotations

import csv
import logging
from datetime import date, datetime

from focus_engine.schema import Goal, TimeEntry

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "date", "duration", "task_name")


def _optional(row: dict, name: str) -> str | None:
    value = row.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_row(row: dict, row_number: int) -> TimeEntry:
    missing = [field for field in _REQUIRED_FIELDS if not (row.get(field) or "").strip()]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        calendar_date = date.fromisoformat(row["date"].strip().split("T", maxsplit=1)[0])
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: malformed date") from exc

    try:
        duration = int(row["duration"])
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: invalid duration") from exc

    started_raw = _optional(row, "started_at")
    started_at = None
    if started_raw is not None:
        try:
            started_at = datetime.fromisoformat(started_raw)
        except Exception as exc:  # noqa: BLE001
            raise ValueError(f"Row {row_number}: malformed started_at") from exc

    goal_id = _optional(row, "goal_id")
    goal_title = _optional(row, "goal_title")
    goal = None
    if goal_id and goal_title:
        goal = Goal(id=goal_id, title=goal_title, color=_optional(row, "goal_color"))

    return TimeEntry(
        id=row["id"].strip(),
        calendar_date=calendar_date,
        duration_minutes=duration,
        task_name=row["task_name"],
        started_at=started_at,
        task_id=_optional(row, "task_id"),
        task_title=_optional(row, "task_title"),
        goal_id=goal_id,
        goal=goal,
        category=_optional(row, "category"),
    )


def parse(file_path: str) -> list[TimeEntry]:
    """Parse CSV file into a list of time entries."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        entries: list[TimeEntry] = []
        for row_number, row in enumerate(reader, start=2):
            entries.append(_parse_row(row, row_number))

    logger.info("Loaded %d time entries from %s", len(entries), file_path)
    return entries
