"""Calendar bucketing: bucket keys, gapless bucket ranges and rolling periods."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Mapping, Optional, Union

from dateutil.relativedelta import relativedelta

from focus_engine.config import get_settings
from focus_engine.schema import GRANULARITIES, PeriodRange

DayLike = Union[date, datetime, str]

_STEPS = {
    "day": relativedelta(days=1),
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
}


def _check_granularity(granularity: str) -> None:
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity '{granularity}', expected one of {GRANULARITIES}")


def to_date_only(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_day(value: DayLike) -> date:
    """Coerce a date, datetime or ISO string to a plain date.

    Strings carrying a time part (``2024-03-04T10:00``) are cut at the ``T``.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" in text:
        text = text.split("T", maxsplit=1)[0]
    return date.fromisoformat(text)


def week_start(day: date) -> date:
    """Monday on or before ``day``."""

    return day - timedelta(days=day.weekday())


def _bucket_start(day: date, granularity: str) -> date:
    if granularity == "day":
        return day
    if granularity == "week":
        return week_start(day)
    return day.replace(day=1)


def derive_bucket_key(day: DayLike, granularity: str) -> str:
    """Return the canonical period-start key for ``day``."""

    _check_granularity(granularity)
    return to_date_only(_bucket_start(parse_day(day), granularity))


def bucket_label(key: DayLike, granularity: str) -> str:
    _check_granularity(granularity)
    d = parse_day(key)
    if granularity == "month":
        return d.strftime("%b %y")
    return f"{d.strftime('%b')} {d.day}"


def enumerate_buckets(granularity: str, start_date: DayLike, end_date: DayLike) -> list[str]:
    """List every bucket key between two dates inclusive, with no gaps.

    Both bounds are normalized to their bucket start first; an inverted range
    yields an empty list.
    """

    _check_granularity(granularity)
    first = _bucket_start(parse_day(start_date), granularity)
    end = _bucket_start(parse_day(end_date), granularity)

    keys: list[str] = []
    step = _STEPS[granularity]
    index = 0
    cursor = first
    while cursor <= end:
        keys.append(to_date_only(cursor))
        index += 1
        cursor = first + step * index
    return keys


def _today(now: Optional[DayLike]) -> date:
    if now is None:
        return date.today()
    return parse_day(now)


def rolling_range(
    granularity: str,
    offset: int = 0,
    now: Optional[DayLike] = None,
    window_sizes: Optional[Mapping[str, int]] = None,
) -> PeriodRange:
    """Return the multi-period window used by trend charts.

    ``offset`` 0 ends on the period containing ``now``; negative values move
    that many periods back. Positive offsets are accepted; callers clamp them.
    """

    _check_granularity(granularity)
    sizes = window_sizes or get_settings().rolling_window_sizes
    window = int(sizes[granularity])
    today = _today(now)

    if granularity == "day":
        end = today + timedelta(days=offset)
        start = end - timedelta(days=window - 1)
        label = f"{bucket_label(start, 'day')} - {bucket_label(end, 'day')}"
    elif granularity == "week":
        end = today + timedelta(weeks=offset)
        start = week_start(end) - timedelta(weeks=window - 1)
        label = f"{bucket_label(start, 'day')} - {bucket_label(end, 'day')}"
    else:
        end = today + relativedelta(months=offset)
        start = (end - relativedelta(months=window - 1)).replace(day=1)
        label = f"{start.strftime('%b %Y')} - {end.strftime('%b %Y')}"

    return PeriodRange(start_date=to_date_only(start), end_date=to_date_only(end), label=label)


def period_range(period: str, offset: int = 0, now: Optional[DayLike] = None) -> PeriodRange:
    """Return the single day, Monday-Sunday week or calendar month around ``now``.

    The result lists every day of the period, which is what ``build_time_grid``
    expects as its day axis.
    """

    _check_granularity(period)
    today = _today(now)

    if period == "day":
        anchor = today + timedelta(days=offset)
        day = to_date_only(anchor)
        return PeriodRange(start_date=day, end_date=day, label=bucket_label(anchor, "day"), days=[day])

    if period == "week":
        start = week_start(today + timedelta(weeks=offset))
        end = start + timedelta(days=6)
        label = f"{bucket_label(start, 'day')} - {bucket_label(end, 'day')}"
    else:
        start = (today + relativedelta(months=offset)).replace(day=1)
        end = start + relativedelta(months=1) - timedelta(days=1)
        label = start.strftime("%B %Y")

    days = [to_date_only(start + timedelta(days=i)) for i in range((end - start).days + 1)]
    return PeriodRange(start_date=to_date_only(start), end_date=to_date_only(end), label=label, days=days)
