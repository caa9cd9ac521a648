"""Display helpers for minute totals and hour labels."""

from __future__ import annotations


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_hour_label(hour: int) -> str:
    """12-hour clock label for an hour bin, e.g. ``12am``, ``3pm``."""

    meridiem = "pm" if hour >= 12 else "am"
    hour12 = 12 if hour % 12 == 0 else hour % 12
    return f"{hour12}{meridiem}"


def format_minutes_as_hours_tick(minutes: int) -> str:
    if minutes == 0:
        return "0"
    hours = minutes / 60
    if hours.is_integer():
        return f"{int(hours)}h"
    return f"{hours:.1f}h"


def format_excluded_note(excluded_minutes: int, excluded_entries: int) -> str:
    """Footnote for entries left off hour-based charts for lacking a start time."""

    if excluded_minutes <= 0:
        return ""
    suffix = "entry" if excluded_entries == 1 else "entries"
    return f"Excluding {format_duration(excluded_minutes)} ({excluded_entries} {suffix}) without a start time."
