"""Study history statistics and plan summaries."""
from collections import defaultdict
from datetime import date, datetime, timedelta

from study_planner.models import CompletedTask, SchedulePlan


def get_progress_label(pct: float) -> str:
    if pct >= 80:
        return "ON TRACK"
    elif pct >= 50:
        return "STEADY"
    elif pct >= 30:
        return "SLIPPING"
    return "BEHIND"


def get_progress_color(pct: float) -> str:
    if pct >= 80:
        return "green"
    elif pct >= 50:
        return "yellow"
    elif pct >= 30:
        return "dark_orange"
    return "red"


def _completed_on(record: CompletedTask) -> date:
    return datetime.fromisoformat(record.completed_at).date()


def _hours(record: CompletedTask) -> float:
    task = record.task
    return task.actual_hours if task.actual_hours is not None else task.estimated_hours


def calc_streak(records: list[CompletedTask], today: date | None = None) -> int:
    """Consecutive days, ending today, with at least one completed task."""
    today = today or date.today()
    days = sorted({_completed_on(r) for r in records}, reverse=True)
    streak = 0
    for i, day in enumerate(days):
        if (today - day).days != i:
            break
        streak += 1
    return streak


def calc_history_stats(records: list[CompletedTask], today: date | None = None) -> dict:
    total_hours = sum(_hours(r) for r in records)
    active_days = len({_completed_on(r) for r in records})
    return {
        "total_completed": len(records),
        "total_hours": round(total_hours, 2),
        "streak": calc_streak(records, today),
        "avg_hours_per_day": round(total_hours / max(active_days, 1), 2),
    }


def get_weekly_hours(records: list[CompletedTask], today: date | None = None) -> list[dict]:
    """Hours and task counts for the last seven days, oldest first."""
    today = today or date.today()
    week = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        day_records = [r for r in records if _completed_on(r) == day]
        week.append({
            "date": day.isoformat(),
            "weekday": day.strftime("%a"),
            "hours": round(sum(_hours(r) for r in day_records), 2),
            "tasks": len(day_records),
        })
    return week


def get_subject_breakdown(records: list[CompletedTask]) -> list[dict]:
    breakdown = {}
    for r in records:
        name = r.task.subject_name
        entry = breakdown.setdefault(name, {"name": name, "completed": 0, "hours": 0.0})
        entry["completed"] += 1
        entry["hours"] += _hours(r)
    for entry in breakdown.values():
        entry["hours"] = round(entry["hours"], 2)
    return list(breakdown.values())


def get_plan_summary(plan: SchedulePlan) -> dict:
    completed = sum(t.estimated_hours for t in plan.daily_tasks if t.completed)
    pending = sum(t.estimated_hours for t in plan.daily_tasks if not t.completed)
    by_subject = defaultdict(float)
    for t in plan.daily_tasks:
        by_subject[t.subject_name] += t.estimated_hours
    scheduled = completed + pending
    return {
        "tasks": len(plan.daily_tasks),
        "completed_hours": round(completed, 2),
        "pending_hours": round(pending, 2),
        "hours_by_subject": {k: round(v, 2) for k, v in by_subject.items()},
        "completion_pct": round(completed / scheduled * 100, 1) if scheduled else 0.0,
    }
