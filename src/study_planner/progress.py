"""Task completion and topic progress tracking."""
from dataclasses import replace
from datetime import date, datetime, timedelta

from study_planner.models import CompletedTask, DailyTask, SchedulePlan, Subject


def mark_task_completed(
    plan: SchedulePlan,
    task_id: str,
    completed_at: datetime | None = None,
    subject_name: str | None = None,
) -> tuple[SchedulePlan, CompletedTask | None]:
    """Return a new plan with the task completed, plus its history record.

    Task ids repeat across subjects that share a topic id. Pass subject_name
    to pick the right one; otherwise only the first match changes.
    """
    index = next(
        (i for i, t in enumerate(plan.daily_tasks)
         if t.id == task_id and subject_name in (None, t.subject_name)),
        None,
    )
    if index is None:
        return plan, None
    target = plan.daily_tasks[index]
    done = replace(target, completed=True, actual_hours=target.estimated_hours)
    tasks = list(plan.daily_tasks)
    tasks[index] = done
    record = CompletedTask(task=done, completed_at=(completed_at or datetime.now()).isoformat())
    return replace(plan, daily_tasks=tasks), record


def calc_subject_progress(subject: Subject) -> float:
    if not subject.topics:
        return 0.0
    return sum(t.progress for t in subject.topics) / len(subject.topics)


def update_topic_progress(subject: Subject, topic_id: str, progress: int) -> Subject:
    """Set a topic's progress; 100% marks it completed."""
    if not any(t.id == topic_id for t in subject.topics):
        raise KeyError(f"Topic {topic_id!r} not found in subject {subject.name!r}")
    progress = max(0, min(100, int(progress)))
    topics = [
        replace(t, progress=progress, completed=progress == 100) if t.id == topic_id else t
        for t in subject.topics
    ]
    updated = replace(subject, topics=topics)
    updated.progress = calc_subject_progress(updated)
    return updated


def apply_completed_task(subjects: list[Subject], task: DailyTask) -> list[Subject]:
    """Advance the progress of the topic a completed study task belongs to."""
    if task.kind != "study":
        return subjects
    result = []
    for subject in subjects:
        topic = next((t for t in subject.topics if t.id == task.topic_id), None)
        if topic is None or subject.name != task.subject_name or topic.estimated_hours <= 0:
            result.append(subject)
            continue
        hours = task.actual_hours if task.actual_hours is not None else task.estimated_hours
        gained = hours / topic.estimated_hours * 100
        result.append(update_topic_progress(subject, topic.id, round(topic.progress + gained)))
    return result


def get_tasks_for_date(plan: SchedulePlan, day: date) -> list[DailyTask]:
    day_iso = day.isoformat()
    return [t for t in plan.daily_tasks if t.date == day_iso]


def get_week_dates(today: date | None = None, week_offset: int = 0) -> list[date]:
    """The seven dates of a Sunday-start week relative to today."""
    today = today or date.today()
    start = today - timedelta(days=(today.weekday() + 1) % 7) + timedelta(weeks=week_offset)
    return [start + timedelta(days=i) for i in range(7)]
