from datetime import date

from focus_engine.schema import Goal, TimeEntry
from focus_engine.series import (
    build_category_breakdown,
    build_stacked_series,
    build_task_totals_by_day,
    build_trend_series,
)

SHIP = Goal(id="g1", title="Ship Q1", color="#3B82F6", category="DEEP_WORK")
HEALTH = Goal(id="g2", title="Health", color="#22C55E")


def sample_entries():
    return [
        TimeEntry("e1", date(2024, 3, 4), 90, "Write report", goal_id="g1", goal=SHIP),
        TimeEntry("e2", date(2024, 3, 5), 45, "Email", category="ADMIN"),
        TimeEntry("e3", date(2024, 3, 12), 30, " email ", category="ADMIN"),
        TimeEntry("e4", date(2024, 3, 13), 60, "Running", goal_id="g2", goal=HEALTH),
        TimeEntry("e5", date(2024, 3, 20), 20, "Code review", goal_id="g1", goal=SHIP),
    ]


def test_empty_entries_still_fill_range():
    series = build_stacked_series([], "week", "goal", 6, start_date="2024-01-01", end_date="2024-01-21")
    assert [row.bucket_key for row in series.rows] == ["2024-01-01", "2024-01-08", "2024-01-15"]
    assert all(row.total_minutes == 0 for row in series.rows)
    assert series.stacks == []
    assert series.total_minutes == 0


def test_goal_series_without_range_uses_observed_buckets():
    series = build_stacked_series(sample_entries(), "week", "goal", 6)

    assert [row.bucket_key for row in series.rows] == ["2024-03-04", "2024-03-11", "2024-03-18"]
    assert [(s.key, s.total_minutes) for s in series.stacks] == [
        ("goal:g1", 110),
        ("goal:none", 75),
        ("goal:g2", 60),
    ]
    first = series.rows[0]
    assert first.values == {"goal:g1": 90, "goal:none": 45, "goal:g2": 0}
    assert first.total_minutes == 135
    assert series.total_minutes == 245


def test_every_row_has_every_stack():
    series = build_stacked_series(sample_entries(), "day", "goal", 2, start_date="2024-03-01", end_date="2024-03-31")
    keys = [stack.key for stack in series.stacks]
    assert keys == ["goal:g1", "goal:none", "goal:other"]
    assert len(series.rows) == 31
    for row in series.rows:
        assert list(row.values) == keys
        assert row.total_minutes == sum(row.values.values())
    assert sum(row.total_minutes for row in series.rows) == series.total_minutes


def test_other_stack_sums_non_selected_groups_per_bucket():
    series = build_stacked_series(sample_entries(), "month", "goal", 1)
    assert [s.key for s in series.stacks] == ["goal:g1", "goal:other"]
    (row,) = series.rows
    assert row.values == {"goal:g1": 110, "goal:other": 135}


def test_task_names_merge_into_one_group():
    series = build_stacked_series(sample_entries(), "month", "task", 10)
    email = [s for s in series.stacks if s.key == "taskname:email"]
    assert len(email) == 1
    assert email[0].total_minutes == 75
    assert email[0].label == "email"


def test_entries_outside_range_count_in_total_only():
    series = build_stacked_series(sample_entries(), "week", "goal", 6, start_date="2024-03-04", end_date="2024-03-10")
    assert len(series.rows) == 1
    assert series.rows[0].total_minutes == 135
    assert series.total_minutes == 245


def test_stacked_series_is_deterministic():
    first = build_stacked_series(sample_entries(), "week", "task", 2, "2024-03-01", "2024-03-31")
    second = build_stacked_series(sample_entries(), "week", "task", 2, "2024-03-01", "2024-03-31")
    assert first == second
    assert first.to_dict() == second.to_dict()


def test_to_dict_flattens_rows():
    payload = build_stacked_series(sample_entries(), "month", "goal", 6).to_dict()
    row = payload["data"][0]
    assert row["bucket_key"] == "2024-03-01"
    assert row["bucket_label"] == "Mar 24"
    assert row["goal:g1"] == 110
    assert payload["stacks"][0]["label"] == "Ship Q1"


def test_trend_series():
    trend = build_trend_series(sample_entries(), "week", start_date="2024-02-26", end_date="2024-03-24")
    assert [(p.bucket_key, p.minutes) for p in trend.points] == [
        ("2024-02-26", 0),
        ("2024-03-04", 135),
        ("2024-03-11", 90),
        ("2024-03-18", 20),
    ]
    assert trend.total_minutes == 245


def test_category_breakdown():
    slices = build_category_breakdown(sample_entries(), {"ADMIN": "Admin"})
    assert [(s.key, s.label, s.minutes) for s in slices] == [
        ("category:DEEP_WORK", "DEEP_WORK", 110),
        ("category:ADMIN", "Admin", 75),
        ("category:none", "Uncategorized", 60),
    ]


def test_task_totals_by_day():
    result = build_task_totals_by_day(sample_entries())

    assert [(d.date, d.day_of_week, d.total_minutes) for d in result.days] == [
        ("2024-03-04", "Monday", 90),
        ("2024-03-05", "Tuesday", 45),
        ("2024-03-12", "Tuesday", 30),
        ("2024-03-13", "Wednesday", 60),
        ("2024-03-20", "Wednesday", 20),
    ]
    first = result.days[0].tasks[0]
    assert (first.task_key, first.task_name, first.goal_title, first.goal_color) == (
        "taskname:write report",
        "Write report",
        "Ship Q1",
        "#3B82F6",
    )
    assert result.days[2].tasks[0].task_key == "taskname:email"
    assert result.total_minutes == 245
    assert result.unique_tasks == 4


def test_task_totals_merge_names_within_a_day():
    entries = [
        TimeEntry("e1", date(2024, 3, 6), 10, "Email"),
        TimeEntry("e2", date(2024, 3, 6), 20, "Write", goal_id="g1", goal=SHIP),
        TimeEntry("e3", date(2024, 3, 6), 15, " EMAIL "),
        TimeEntry("e4", date(2024, 3, 6), 5, "plan", task_id="t1", task_title="Plan sprint"),
        TimeEntry("e5", date(2024, 3, 5), 5, "email"),
    ]
    result = build_task_totals_by_day(entries)

    assert [d.date for d in result.days] == ["2024-03-05", "2024-03-06"]
    day = result.days[1]
    assert [(t.task_key, t.task_name, t.total_minutes) for t in day.tasks] == [
        ("taskname:email", "Email", 25),
        ("taskname:write", "Write", 20),
        ("task:t1", "Plan sprint", 5),
    ]
    assert day.total_minutes == 50
    assert result.unique_tasks == 3
    assert result.to_dict()["data"][1]["tasks"][0]["total_minutes"] == 25


def test_stacked_series_uses_given_palette_and_other_color():
    entries = sample_entries() + [TimeEntry("e6", date(2024, 3, 21), 5, "Misc", goal_id="g3", goal=Goal("g3", "Side"))]
    series = build_stacked_series(entries, "month", "goal", 3, palette=("#111111",), other_color="#000000")

    colors = {s.key: s.color for s in series.stacks}
    assert colors == {
        "goal:g1": "#3B82F6",
        "goal:none": "#000000",
        "goal:g2": "#22C55E",
        "goal:other": "#000000",
    }


def test_stacked_series_palette_fills_missing_colors():
    entries = [TimeEntry("e1", date(2024, 3, 4), 30, "Misc", goal_id="g3", goal=Goal("g3", "Side"))]
    series = build_stacked_series(entries, "month", "goal", 3, palette=("#111111",))
    assert series.stacks[0].color == "#111111"
