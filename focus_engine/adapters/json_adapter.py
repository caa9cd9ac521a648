"""JSON adapter for time entries."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime

from focus_engine.schema import Goal, TimeEntry

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "date", "duration", "task_name")


def _text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_goal(item: dict, index: int) -> Goal | None:
    goal_raw = item.get("goal")
    if goal_raw is None:
        if item.get("goal_id") and item.get("goal_title"):
            return Goal(id=str(item["goal_id"]), title=str(item["goal_title"]), color=_text(item.get("goal_color")))
        return None
    if not isinstance(goal_raw, dict):
        raise ValueError(f"Item {index}: goal must be an object")
    goal_id = _text(goal_raw.get("id")) or _text(item.get("goal_id"))
    title = _text(goal_raw.get("title"))
    if not goal_id or not title:
        return None
    return Goal(
        id=goal_id,
        title=title,
        color=_text(goal_raw.get("color")),
        category=_text(goal_raw.get("category")),
    )


def _parse_item(item: dict, index: int) -> TimeEntry:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = [field for field in _REQUIRED_FIELDS if item.get(field) in (None, "")]
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        calendar_date = date.fromisoformat(str(item["date"]).strip().split("T", maxsplit=1)[0])
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Item {index}: malformed date") from exc

    try:
        duration = int(item["duration"])
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Item {index}: invalid duration") from exc

    started_at = None
    if item.get("started_at"):
        try:
            started_at = datetime.fromisoformat(str(item["started_at"]))
        except Exception as exc:  # noqa: BLE001
            raise ValueError(f"Item {index}: malformed started_at") from exc

    goal = _parse_goal(item, index)

    return TimeEntry(
        id=str(item["id"]).strip(),
        calendar_date=calendar_date,
        duration_minutes=duration,
        task_name=str(item["task_name"]),
        started_at=started_at,
        task_id=_text(item.get("task_id")),
        task_title=_text(item.get("task_title")),
        goal_id=_text(item.get("goal_id")) or (goal.id if goal is not None else None),
        goal=goal,
        category=_text(item.get("category")),
    )


def parse(file_path: str) -> list[TimeEntry]:
    """Parse JSON file into time entries."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    entries = [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
    logger.info("Loaded %d time entries from %s", len(entries), file_path)
    return entries
