# tests/test_dashboard.py
from datetime import timedelta

from study_planner.dashboard import (
    calc_history_stats, calc_streak, get_plan_summary, get_progress_color, get_progress_label,
    get_subject_breakdown, get_weekly_hours,
)
from study_planner.models import CompletedTask, DailyTask, SchedulePlan


def record(day, hours=1.0, subject="Math"):
    task = DailyTask(id=f"t-{day}", date=day.isoformat(), topic_id="t", topic_title="T",
                     subject_name=subject, estimated_hours=hours, completed=True, actual_hours=hours)
    return CompletedTask(task=task, completed_at=f"{day.isoformat()}T20:00:00")


def test_progress_label():
    assert get_progress_label(85) == "ON TRACK"
    assert get_progress_label(60) == "STEADY"
    assert get_progress_label(35) == "SLIPPING"
    assert get_progress_label(10) == "BEHIND"
    assert get_progress_color(10) == "red"


def test_streak_counts_consecutive_days(today):
    records = [record(today), record(today - timedelta(days=1)), record(today - timedelta(days=3))]
    assert calc_streak(records, today) == 2


def test_streak_zero_without_today(today):
    assert calc_streak([record(today - timedelta(days=1))], today) == 0


def test_history_stats(today):
    records = [record(today, 2), record(today, 1), record(today - timedelta(days=1), 3)]
    stats = calc_history_stats(records, today)
    assert stats == {
        "total_completed": 3,
        "total_hours": 6,
        "streak": 2,
        "avg_hours_per_day": 3,
    }


def test_history_stats_empty(today):
    stats = calc_history_stats([], today)
    assert stats["total_completed"] == 0
    assert stats["avg_hours_per_day"] == 0


def test_weekly_hours(today):
    week = get_weekly_hours([record(today, 2), record(today - timedelta(days=6), 1)], today)
    assert len(week) == 7
    assert week[0]["date"] == (today - timedelta(days=6)).isoformat()
    assert week[0]["hours"] == 1
    assert week[-1]["hours"] == 2
    assert week[-1]["weekday"] == "Mon"
    assert sum(d["tasks"] for d in week) == 2


def test_subject_breakdown(today):
    records = [record(today, 2), record(today, 1, "Physics"), record(today, 1)]
    breakdown = {b["name"]: b for b in get_subject_breakdown(records)}
    assert breakdown["Math"]["completed"] == 2
    assert breakdown["Math"]["hours"] == 3
    assert breakdown["Physics"]["completed"] == 1


def test_subject_breakdown_rounds_hours(today):
    records = [record(today, 0.1), record(today, 0.2)]
    assert get_subject_breakdown(records)[0]["hours"] == 0.3


def test_plan_summary(today):
    done = record(today, 1).task
    pending = DailyTask(id="p", date=today.isoformat(), topic_id="p", topic_title="P",
                        subject_name="Physics", estimated_hours=3)
    summary = get_plan_summary(SchedulePlan(daily_tasks=[done, pending]))
    assert summary["tasks"] == 2
    assert summary["completed_hours"] == 1
    assert summary["pending_hours"] == 3
    assert summary["hours_by_subject"] == {"Math": 1, "Physics": 3}
    assert summary["completion_pct"] == 25.0


def test_plan_summary_empty():
    assert get_plan_summary(SchedulePlan())["completion_pct"] == 0.0
