# tests/test_reschedule.py
from datetime import timedelta

import pytest

from study_planner.models import DailyTask, SchedulePlan
from study_planner.reschedule import (
    RESCHEDULE_MESSAGES, find_missed_tasks, reschedule_after_missed_tasks,
)


def task(task_id, day, hours=1.0, completed=False):
    return DailyTask(
        id=task_id, date=day.isoformat(), topic_id=task_id, topic_title=task_id,
        subject_name="Math", estimated_hours=hours, completed=completed,
    )


def make_plan(today):
    return SchedulePlan(
        daily_tasks=[
            task("past", today - timedelta(days=1), hours=2),
            task("now", today, hours=1),
            task("next", today + timedelta(days=1), hours=1),
            task("later", today + timedelta(days=2), hours=1.5),
        ],
        total_hours=5.5,
        days_until_exams=10,
        average_hours_per_day=2,
        recommendations=["load", "hard", "revise", "tip"],
    )


def test_missed_hours_spread_over_future_tasks(today):
    plan = make_plan(today)
    result = reschedule_after_missed_tasks(plan, [plan.daily_tasks[0]], today)
    hours = {t.id: t.estimated_hours for t in result.daily_tasks}
    assert "past" not in hours
    assert hours["now"] == 1  # today is not redistributed onto
    assert hours["next"] == pytest.approx(2)
    assert hours["later"] == pytest.approx(2.5)


def test_redistribution_conserves_hours(today):
    plan = make_plan(today)
    missed = [plan.daily_tasks[0], plan.daily_tasks[1]]
    result = reschedule_after_missed_tasks(plan, missed, today)
    before = sum(t.estimated_hours for t in plan.daily_tasks[2:])
    after = sum(t.estimated_hours for t in result.daily_tasks)
    assert after - before == pytest.approx(3)


def test_input_plan_untouched(today):
    plan = make_plan(today)
    reschedule_after_missed_tasks(plan, [plan.daily_tasks[0]], today)
    assert len(plan.daily_tasks) == 4
    assert plan.daily_tasks[2].estimated_hours == 1
    assert plan.recommendations == ["load", "hard", "revise", "tip"]


def test_recommendations_replace_first_two(today):
    plan = make_plan(today)
    result = reschedule_after_missed_tasks(plan, [plan.daily_tasks[0]], today)
    assert result.recommendations == RESCHEDULE_MESSAGES + ["revise", "tip"]


def test_plan_totals_carried_over(today):
    plan = make_plan(today)
    result = reschedule_after_missed_tasks(plan, [plan.daily_tasks[0]], today)
    assert result.total_hours == 5.5
    assert result.days_until_exams == 10
    assert result.average_hours_per_day == 2


def test_no_future_tasks_drops_hours(today):
    plan = SchedulePlan(daily_tasks=[
        task("old", today - timedelta(days=2), hours=2),
        task("now", today, hours=1),
    ])
    result = reschedule_after_missed_tasks(plan, [plan.daily_tasks[0]], today)
    assert [t.id for t in result.daily_tasks] == ["now"]
    assert result.daily_tasks[0].estimated_hours == 1


def test_no_missed_tasks_is_noop_for_hours(today):
    plan = make_plan(today)
    result = reschedule_after_missed_tasks(plan, [], today)
    assert [t.estimated_hours for t in result.daily_tasks] == [2, 1, 1, 1.5]


def test_find_missed_tasks(today):
    plan = make_plan(today)
    plan.daily_tasks.append(task("done", today - timedelta(days=3), completed=True))
    assert [t.id for t in find_missed_tasks(plan, today)] == ["past"]
