"""Greedy study schedule generation.

Subjects are flattened into remaining-work topics, ordered by a weighted
difficulty/hours score, then packed first-fit into successive days until the
nearest exam. The ordering is a heuristic, not an optimal allocation.
"""
import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from functools import cmp_to_key

from study_planner.models import DailyTask, SchedulePlan, StudyPlanParameters, Subject, Topic
from study_planner.recommendations import ALL_COMPLETED_MESSAGE, generate_recommendations

logger = logging.getLogger(__name__)

DIFFICULTY_WEIGHTS = {"easy": 1, "medium": 1.5, "hard": 2}
MIN_SESSION_HOURS = 0.5


class InvalidScheduleInput(ValueError):
    """Raised when subjects can't be turned into a study horizon."""

    def __init__(self, message: str, subject_name: str | None = None):
        super().__init__(message)
        self.subject_name = subject_name


def difficulty_weight(difficulty: str) -> float:
    return DIFFICULTY_WEIGHTS.get(difficulty, DIFFICULTY_WEIGHTS["medium"])


def flatten_topics(subjects: list[Subject]) -> list[Topic]:
    """Copy every topic out of its subject, scaled to its remaining hours.

    Completed topics are kept; filtering happens in prioritize_topics.
    """
    flattened = []
    for subject in subjects:
        for topic in subject.topics:
            flattened.append(replace(
                topic,
                youtube_links=list(topic.youtube_links),
                subject_id=subject.id,
                subject_name=subject.name,
                estimated_hours=topic.estimated_hours * (100 - topic.progress) / 100,
            ))
    return flattened


def _compare_topics(a: Topic, b: Topic) -> float:
    difficulty_score = difficulty_weight(b.difficulty) - difficulty_weight(a.difficulty)
    hours_score = b.estimated_hours - a.estimated_hours
    return difficulty_score * 2 + hours_score


def prioritize_topics(topics: list[Topic]) -> list[Topic]:
    """Drop completed topics and sort harder, larger ones first (stable)."""
    incomplete = [t for t in topics if not t.completed]
    return sorted(incomplete, key=cmp_to_key(_compare_topics))


def _parse_exam_date(subject: Subject) -> date:
    value = subject.exam_date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        raise InvalidScheduleInput(
            f"Subject '{subject.name}' has an invalid exam date: {value!r}",
            subject_name=subject.name,
        ) from None


def calculate_study_plan(subjects: list[Subject], today: date | None = None) -> StudyPlanParameters:
    """Compute the horizon and daily budget shared by all subjects."""
    if not subjects:
        raise InvalidScheduleInput("At least one subject is required to compute a study plan")
    today = today or date.today()
    exam_dates = [_parse_exam_date(s) for s in subjects]
    for subject in subjects:
        if subject.daily_hours < 0:
            raise InvalidScheduleInput(
                f"Subject '{subject.name}' has negative daily hours: {subject.daily_hours}",
                subject_name=subject.name,
            )
    # Past-due exams still get one day
    days_until_exams = max(1, (min(exam_dates) - today).days)
    total_daily_hours = sum(s.daily_hours for s in subjects)
    return StudyPlanParameters(
        days_until_exams=days_until_exams,
        total_daily_hours=total_daily_hours,
        average_hours_per_day=total_daily_hours / len(subjects),
    )


def _make_task(topic: Topic, day: date, hours: float) -> DailyTask:
    day_iso = day.isoformat()
    return DailyTask(
        id=f"{topic.id}-{day_iso}",
        date=day_iso,
        topic_id=topic.id,
        topic_title=topic.title,
        subject_name=topic.subject_name,
        estimated_hours=hours,
        difficulty=topic.difficulty,
        youtube_links=list(topic.youtube_links),
        notes=topic.notes,
    )


def allocate_daily_tasks(
    topics: list[Topic],
    params: StudyPlanParameters,
    today: date | None = None,
) -> list[DailyTask]:
    """Pack prioritized topics first-fit into days, in list order.

    A topic whose slice for the day would be under MIN_SESSION_HOURS is
    skipped for that day. Work left when the horizon runs out is dropped.
    """
    today = today or date.today()
    # Private copies: remaining hours are decremented below
    remaining = [replace(t) for t in topics]
    tasks = []
    day_offset = 0

    while remaining and day_offset < params.days_until_exams:
        current = today + timedelta(days=day_offset)
        hours_left = params.total_daily_hours
        i = 0
        while i < len(remaining) and hours_left > 0:
            topic = remaining[i]
            allocate = min(topic.estimated_hours, hours_left)
            if allocate >= MIN_SESSION_HOURS:
                tasks.append(_make_task(topic, current, allocate))
                hours_left -= allocate
                topic.estimated_hours -= allocate
                if topic.estimated_hours <= 0:
                    del remaining[i]
                    continue
            i += 1
        day_offset += 1

    leftover = [t for t in remaining if t.estimated_hours > 0]
    if leftover:
        logger.warning(
            "Horizon of %d day(s) exhausted: %d topic(s) with %.2fh left were not scheduled",
            params.days_until_exams, len(leftover), sum(t.estimated_hours for t in leftover),
        )
    return tasks


def generate_schedule(subjects: list[Subject], today: date | None = None) -> SchedulePlan:
    """Build a day-by-day plan for all incomplete topics before the nearest exam."""
    today = today or date.today()
    topics = prioritize_topics(flatten_topics(subjects))
    if not topics:
        return SchedulePlan(recommendations=[ALL_COMPLETED_MESSAGE])

    params = calculate_study_plan(subjects, today)
    daily_tasks = allocate_daily_tasks(topics, params, today)
    logger.debug("Scheduled %d task(s) over %d day(s)", len(daily_tasks), params.days_until_exams)
    return SchedulePlan(
        daily_tasks=daily_tasks,
        total_hours=sum(t.estimated_hours for t in topics),
        days_until_exams=params.days_until_exams,
        average_hours_per_day=params.average_hours_per_day,
        recommendations=generate_recommendations(subjects, params),
    )
