from datetime import date, datetime

import pytest

from focus_engine.periods import (
    bucket_label,
    derive_bucket_key,
    enumerate_buckets,
    parse_day,
    period_range,
    rolling_range,
)


def test_derive_bucket_key_per_granularity():
    assert derive_bucket_key(date(2024, 3, 10), "day") == "2024-03-10"
    assert derive_bucket_key(date(2024, 3, 10), "week") == "2024-03-04"
    assert derive_bucket_key(date(2024, 3, 4), "week") == "2024-03-04"
    assert derive_bucket_key("2024-03-10T22:00:00", "month") == "2024-03-01"


def test_parse_day_accepts_datetime_and_strings():
    assert parse_day(datetime(2024, 3, 4, 23, 30)) == date(2024, 3, 4)
    assert parse_day(" 2024-03-04 ") == date(2024, 3, 4)


def test_bucket_labels():
    assert bucket_label("2024-03-04", "day") == "Mar 4"
    assert bucket_label("2024-03-04", "week") == "Mar 4"
    assert bucket_label("2024-03-01", "month") == "Mar 24"


def test_enumerate_days_is_gapless():
    assert enumerate_buckets("day", "2024-01-01", "2024-01-05") == [
        "2024-01-01",
        "2024-01-02",
        "2024-01-03",
        "2024-01-04",
        "2024-01-05",
    ]


def test_enumerate_weeks_are_monday_aligned():
    keys = enumerate_buckets("week", "2024-01-03", "2024-01-20")
    assert keys == ["2024-01-01", "2024-01-08", "2024-01-15"]
    assert all(date.fromisoformat(key).weekday() == 0 for key in keys)


def test_enumerate_months_across_short_months():
    assert enumerate_buckets("month", "2024-01-31", "2024-03-02") == ["2024-01-01", "2024-02-01", "2024-03-01"]


def test_enumerate_inverted_range_is_empty():
    assert enumerate_buckets("day", "2024-01-05", "2024-01-01") == []
    # Both days normalize to the same Monday, so the range is not inverted.
    assert enumerate_buckets("week", "2024-01-05", "2024-01-02") == ["2024-01-01"]


def test_unknown_granularity_raises():
    with pytest.raises(ValueError):
        derive_bucket_key("2024-01-01", "year")
    with pytest.raises(ValueError):
        enumerate_buckets("hour", "2024-01-01", "2024-01-02")


def test_rolling_range_days():
    result = rolling_range("day", 0, now=date(2024, 3, 14))
    assert result.start_date == "2024-03-01"
    assert result.end_date == "2024-03-14"
    assert result.label == "Mar 1 - Mar 14"

    earlier = rolling_range("day", -2, now=date(2024, 3, 14))
    assert earlier.end_date == "2024-03-12"


def test_rolling_range_weeks_start_on_monday():
    result = rolling_range("week", 0, now=date(2024, 3, 14))
    assert result.start_date == "2023-12-25"
    assert result.end_date == "2024-03-14"
    assert len(enumerate_buckets("week", result.start_date, result.end_date)) == 12


def test_rolling_range_months_clamp_day():
    result = rolling_range("month", -1, now=date(2024, 3, 31))
    assert result.end_date == "2024-02-29"
    assert result.start_date == "2023-03-01"
    assert result.label == "Mar 2023 - Feb 2024"


def test_rolling_range_custom_window():
    result = rolling_range("day", 0, now="2024-03-14", window_sizes={"day": 3})
    assert (result.start_date, result.end_date) == ("2024-03-12", "2024-03-14")


def test_period_range_week_lists_seven_days():
    result = period_range("week", 0, now=date(2024, 3, 6))
    assert result.days == [
        "2024-03-04",
        "2024-03-05",
        "2024-03-06",
        "2024-03-07",
        "2024-03-08",
        "2024-03-09",
        "2024-03-10",
    ]
    assert result.label == "Mar 4 - Mar 10"


def test_period_range_month_and_day():
    month = period_range("month", 0, now="2024-02-15")
    assert (month.start_date, month.end_date) == ("2024-02-01", "2024-02-29")
    assert len(month.days) == 29

    day = period_range("day", -1, now=date(2024, 3, 1))
    assert day.days == ["2024-02-29"]
    assert day.start_date == day.end_date == "2024-02-29"
