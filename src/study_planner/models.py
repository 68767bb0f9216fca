"""Data classes for the study planner domain model."""
from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass
class Topic:
    id: str
    title: str
    estimated_hours: float
    difficulty: str = "medium"  # easy | medium | hard
    completed: bool = False
    progress: int = 0
    youtube_links: list[str] = field(default_factory=list)
    notes: str = ""
    # Only set on flattened copies
    subject_id: str = ""
    subject_name: str = ""


@dataclass
class Subject:
    id: str
    name: str
    exam_date: Optional[str]
    topics: list[Topic] = field(default_factory=list)
    daily_hours: float = 2.0
    progress: float = 0.0


@dataclass(frozen=True)
class StudyPlanParameters:
    days_until_exams: int
    total_daily_hours: float
    average_hours_per_day: float


@dataclass
class DailyTask:
    id: str
    date: str  # ISO YYYY-MM-DD
    topic_id: str
    topic_title: str
    subject_name: str
    estimated_hours: float
    difficulty: str = "medium"
    kind: str = "study"  # study | review
    completed: bool = False
    actual_hours: Optional[float] = None
    youtube_links: list[str] = field(default_factory=list)
    notes: str = ""


@dataclass
class SchedulePlan:
    daily_tasks: list[DailyTask] = field(default_factory=list)
    total_hours: float = 0.0
    days_until_exams: int = 0
    average_hours_per_day: float = 0.0
    recommendations: list[str] = field(default_factory=list)


@dataclass
class CompletedTask:
    task: DailyTask
    completed_at: str  # ISO timestamp


@dataclass
class ExamSlot:
    subject_id: str
    subject_name: str
    allocated_hours: float
    time_slot: str  # "9:00 - 13:00"
    topic_ids: list[str] = field(default_factory=list)
    topic_titles: list[str] = field(default_factory=list)


@dataclass
class ExamDay:
    date: str  # ISO YYYY-MM-DD
    weekday: str
    slots: list[ExamSlot] = field(default_factory=list)


@dataclass
class ExamTimetable:
    start: str
    end: str
    daily_hours: float
    days: list[ExamDay] = field(default_factory=list)


def task_to_dict(task: DailyTask) -> dict:
    return asdict(task)


def task_from_dict(data: dict) -> DailyTask:
    return DailyTask(
        id=data["id"],
        date=data["date"],
        topic_id=data["topic_id"],
        topic_title=data["topic_title"],
        subject_name=data.get("subject_name", ""),
        estimated_hours=float(data.get("estimated_hours", 0)),
        difficulty=data.get("difficulty", "medium"),
        kind=data.get("kind", "study"),
        completed=bool(data.get("completed", False)),
        actual_hours=data.get("actual_hours"),
        youtube_links=list(data.get("youtube_links") or []),
        notes=data.get("notes") or "",
    )


def plan_to_dict(plan: SchedulePlan) -> dict:
    return asdict(plan)


def plan_from_dict(data: dict) -> SchedulePlan:
    return SchedulePlan(
        daily_tasks=[task_from_dict(t) for t in data.get("daily_tasks", [])],
        total_hours=data.get("total_hours", 0.0),
        days_until_exams=data.get("days_until_exams", 0),
        average_hours_per_day=data.get("average_hours_per_day", 0.0),
        recommendations=list(data.get("recommendations", [])),
    )


def topic_from_dict(data: dict) -> Topic:
    return Topic(
        id=str(data["id"]),
        title=data["title"],
        estimated_hours=float(data.get("estimated_hours", 0)),
        difficulty=data.get("difficulty", "medium"),
        completed=bool(data.get("completed", False)),
        progress=int(data.get("progress", 0)),
        youtube_links=list(data.get("youtube_links") or []),
        notes=data.get("notes") or "",
    )


def subject_from_dict(data: dict) -> Subject:
    exam_date = data.get("exam_date")
    return Subject(
        id=str(data["id"]),
        name=data["name"],
        # YAML loads bare dates as datetime.date
        exam_date=exam_date.isoformat() if hasattr(exam_date, "isoformat") else exam_date,
        topics=[topic_from_dict(t) for t in data.get("topics", [])],
        daily_hours=float(data.get("daily_hours", 2.0)),
        progress=float(data.get("progress", 0.0)),
    )


def timetable_to_dict(timetable: ExamTimetable) -> dict:
    return asdict(timetable)


def timetable_from_dict(data: dict) -> ExamTimetable:
    return ExamTimetable(
        start=data["start"],
        end=data["end"],
        daily_hours=float(data.get("daily_hours", 0)),
        days=[
            ExamDay(
                date=d["date"],
                weekday=d.get("weekday", ""),
                slots=[ExamSlot(**s) for s in d.get("slots", [])],
            )
            for d in data.get("days", [])
        ],
    )
