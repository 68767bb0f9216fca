"""Tests for data model classes."""
from datetime import date

from study_planner.models import (
    DailyTask, SchedulePlan, Subject, Topic,
    plan_from_dict, plan_to_dict, subject_from_dict,
)


def test_topic_defaults():
    t = Topic(id="t1", title="Limits", estimated_hours=2)
    assert t.difficulty == "medium"
    assert t.completed is False
    assert t.progress == 0
    assert t.youtube_links == []
    assert t.notes == ""
    assert t.subject_name == ""


def test_subject_defaults():
    s = Subject(id="s1", name="Math", exam_date="2025-02-01")
    assert s.topics == []
    assert s.daily_hours == 2.0
    assert s.progress == 0.0


def test_daily_task_defaults():
    task = DailyTask(id="x", date="2025-01-06", topic_id="t", topic_title="T",
                     subject_name="Math", estimated_hours=1)
    assert task.kind == "study"
    assert task.completed is False
    assert task.actual_hours is None


def test_empty_plan():
    plan = SchedulePlan()
    assert plan.daily_tasks == []
    assert plan.total_hours == 0.0
    assert plan.recommendations == []


def test_plan_dict_conversion():
    task = DailyTask(id="x", date="2025-01-06", topic_id="t", topic_title="T",
                     subject_name="Math", estimated_hours=1.5, youtube_links=["u"])
    plan = SchedulePlan(daily_tasks=[task], total_hours=1.5, days_until_exams=3,
                        average_hours_per_day=2, recommendations=["r"])
    data = plan_to_dict(plan)
    assert data["daily_tasks"][0]["kind"] == "study"
    assert plan_from_dict(data) == plan


def test_plan_from_partial_dict():
    plan = plan_from_dict({"daily_tasks": [
        {"id": "x", "date": "2025-01-06", "topic_id": "t", "topic_title": "T"},
    ]})
    assert plan.daily_tasks[0].youtube_links == []
    assert plan.daily_tasks[0].difficulty == "medium"
    assert plan.days_until_exams == 0


def test_subject_from_dict_accepts_date():
    s = subject_from_dict({"id": 7, "name": "Art", "exam_date": date(2025, 5, 1)})
    assert s.id == "7"
    assert s.exam_date == "2025-05-01"
