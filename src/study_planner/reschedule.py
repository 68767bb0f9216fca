"""Adaptive rescheduling after missed study tasks."""
import logging
from dataclasses import replace
from datetime import date

from study_planner.models import DailyTask, SchedulePlan

logger = logging.getLogger(__name__)

RESCHEDULE_MESSAGES = [
    "Don't worry about missed tasks - I've redistributed them to future days.",
    "Stay consistent with your schedule to avoid falling behind.",
]


def find_missed_tasks(plan: SchedulePlan, today: date | None = None) -> list[DailyTask]:
    """Incomplete tasks dated before today."""
    today_iso = (today or date.today()).isoformat()
    return [t for t in plan.daily_tasks if not t.completed and t.date < today_iso]


def reschedule_after_missed_tasks(
    plan: SchedulePlan,
    missed: list[DailyTask],
    today: date | None = None,
) -> SchedulePlan:
    """Drop missed tasks and spread their hours evenly over future tasks.

    Tasks dated today or earlier are kept as they are. If there are no future
    tasks the missed hours are dropped. total_hours, days_until_exams and
    average_hours_per_day are carried over from the input plan unchanged.
    """
    today_iso = (today or date.today()).isoformat()
    missed_ids = {t.id for t in missed}
    active = [t for t in plan.daily_tasks if t.id not in missed_ids]
    total_missed_hours = sum(t.estimated_hours for t in missed)
    future_count = sum(1 for t in active if t.date > today_iso)

    if future_count:
        extra = total_missed_hours / future_count
        active = [
            replace(t, estimated_hours=t.estimated_hours + extra) if t.date > today_iso else t
            for t in active
        ]
    elif total_missed_hours:
        logger.warning("No future tasks left; %.2f missed hour(s) dropped", total_missed_hours)

    return replace(
        plan,
        daily_tasks=active,
        recommendations=RESCHEDULE_MESSAGES + plan.recommendations[2:],
    )
