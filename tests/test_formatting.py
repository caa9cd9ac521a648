from focus_engine.formatting import (
    format_duration,
    format_excluded_note,
    format_hour_label,
    format_minutes_as_hours_tick,
)


def test_format_duration():
    assert format_duration(45) == "45m"
    assert format_duration(120) == "2h"
    assert format_duration(90) == "1h 30m"
    assert format_duration(0) == "0m"


def test_format_hour_label():
    assert [format_hour_label(h) for h in (0, 9, 12, 23)] == ["12am", "9am", "12pm", "11pm"]


def test_format_minutes_as_hours_tick():
    assert format_minutes_as_hours_tick(0) == "0"
    assert format_minutes_as_hours_tick(120) == "2h"
    assert format_minutes_as_hours_tick(90) == "1.5h"


def test_format_excluded_note():
    assert format_excluded_note(0, 0) == ""
    assert format_excluded_note(45, 1) == "Excluding 45m (1 entry) without a start time."
    assert format_excluded_note(45, 2) == "Excluding 45m (2 entries) without a start time."
