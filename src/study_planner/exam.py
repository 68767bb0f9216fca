"""Exam-week timetable.

Unlike the daily schedule, every subject is studied every day of the exam
week. The day's budget is split evenly between subjects, each gets its own
back-to-back time slot from DAY_START_HOUR, and topics rotate through the
days so each subject's list is covered across the week.
"""
import logging
import math
from datetime import date, timedelta

from study_planner.models import ExamDay, ExamSlot, ExamTimetable, Subject
from study_planner.scheduler import InvalidScheduleInput

logger = logging.getLogger(__name__)

DEFAULT_EXAM_DAILY_HOURS = 8.0
DAY_START_HOUR = 9


def format_hour(hour: float) -> str:
    minutes = round(hour * 60)
    return f"{minutes // 60}:{minutes % 60:02d}"


def topics_for_day(subject: Subject, day_index: int, total_days: int) -> list:
    """The slice of a subject's topics studied on a given day of the week."""
    topics = subject.topics
    if not topics:
        return []
    per_day = math.ceil(len(topics) / total_days)
    first = (day_index * per_day) % len(topics)
    return topics[first:first + per_day]


def generate_exam_timetable(
    subjects: list[Subject],
    start: date,
    end: date,
    daily_hours: float = DEFAULT_EXAM_DAILY_HOURS,
) -> ExamTimetable:
    if not subjects:
        raise InvalidScheduleInput("At least one subject is required to build an exam timetable")
    if start >= end:
        raise InvalidScheduleInput(f"Exam week end {end} must be after its start {start}")
    if daily_hours < 0:
        raise InvalidScheduleInput(f"Daily study hours can't be negative: {daily_hours}")

    total_days = (end - start).days
    hours_per_subject = daily_hours / len(subjects)
    days = []
    for offset in range(total_days):
        current = start + timedelta(days=offset)
        slots = []
        for index, subject in enumerate(subjects):
            slot_start = DAY_START_HOUR + index * hours_per_subject
            topics = topics_for_day(subject, offset, total_days)
            slots.append(ExamSlot(
                subject_id=subject.id,
                subject_name=subject.name,
                allocated_hours=hours_per_subject,
                time_slot=f"{format_hour(slot_start)} - {format_hour(slot_start + hours_per_subject)}",
                topic_ids=[t.id for t in topics],
                topic_titles=[t.title for t in topics],
            ))
        days.append(ExamDay(date=current.isoformat(), weekday=current.strftime("%A"), slots=slots))

    logger.debug("Exam timetable: %d day(s), %.2fh per subject", total_days, hours_per_subject)
    return ExamTimetable(start=start.isoformat(), end=end.isoformat(), daily_hours=daily_hours, days=days)
