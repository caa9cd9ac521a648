"""Split a timed entry into per-calendar-hour minute segments."""

from __future__ import annotations

from datetime import timedelta

from focus_engine.schema import HourSegment, TimeEntry

_ONE_HOUR = timedelta(hours=1)
_ONE_MINUTE = timedelta(minutes=1)


def distribute_entry_across_hours(entry: TimeEntry) -> list[HourSegment]:
    """Return the hour segments covered by ``[started_at, started_at + duration)``.

    ``started_at`` is truncated to the minute. Segments are split at every hour
    boundary, carry the day and hour of their own start instant, and their
    minutes always add up to ``duration_minutes``. Entries without a start time
    must be routed to the exclusion counters instead of being passed here.
    """

    if entry.started_at is None:
        raise ValueError(f"Entry {entry.id} has no started_at; it cannot be placed on the hour axis")

    if entry.duration_minutes <= 0:
        return []

    start = entry.started_at.replace(second=0, microsecond=0)
    end = start + timedelta(minutes=entry.duration_minutes)

    segments: list[HourSegment] = []
    cursor = start
    while cursor < end:
        next_hour = cursor.replace(minute=0) + _ONE_HOUR
        segment_end = min(next_hour, end)
        minutes = (segment_end - cursor) // _ONE_MINUTE
        if minutes > 0:
            segments.append(HourSegment(day=cursor.strftime("%Y-%m-%d"), hour=cursor.hour, minutes=minutes))
        cursor = segment_end
    return segments
