"""Persistence of subjects, plans and completion history."""
import json
import uuid
from datetime import datetime

from study_planner.db import get_connection
from study_planner.models import (
    CompletedTask, ExamTimetable, SchedulePlan, Subject, Topic,
    plan_from_dict, plan_to_dict, task_from_dict, task_to_dict, timetable_from_dict, timetable_to_dict,
)
from study_planner.progress import calc_subject_progress

DEFAULT_DAILY_HOURS = 2.0


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_default_daily_hours(db_path: str) -> float:
    return float(get_setting(db_path, "default_daily_hours", str(DEFAULT_DAILY_HOURS)))


def add_subject(db_path: str, name: str, exam_date: str, daily_hours: float | None = None) -> str:
    if daily_hours is None:
        daily_hours = get_default_daily_hours(db_path)
    subject_id = uuid.uuid4().hex
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO subjects (id, name, exam_date, daily_hours, created_at) VALUES (?, ?, ?, ?, ?)",
        (subject_id, name, exam_date, daily_hours, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    return subject_id


def delete_subject(db_path: str, subject_id: str) -> None:
    """Delete a subject; its topics go with it."""
    conn = get_connection(db_path)
    conn.execute("DELETE FROM subjects WHERE id = ?", (subject_id,))
    conn.commit()
    conn.close()


def _insert_topic(conn, subject_id: str, topic: Topic, position: int) -> None:
    conn.execute(
        """INSERT INTO topics
        (id, subject_id, title, estimated_hours, difficulty, completed, progress, youtube_links, notes, position)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(subject_id, id) DO UPDATE SET
            title=excluded.title, estimated_hours=excluded.estimated_hours,
            difficulty=excluded.difficulty, completed=excluded.completed,
            progress=excluded.progress, youtube_links=excluded.youtube_links,
            notes=excluded.notes""",
        (topic.id, subject_id, topic.title, topic.estimated_hours, topic.difficulty,
         int(topic.completed), topic.progress, json.dumps(topic.youtube_links), topic.notes, position),
    )


def add_topic(
    db_path: str,
    subject_id: str,
    title: str,
    estimated_hours: float,
    difficulty: str = "medium",
    youtube_links: list[str] | None = None,
    notes: str = "",
) -> str:
    topic = Topic(
        id=uuid.uuid4().hex[:12],
        title=title,
        estimated_hours=estimated_hours,
        difficulty=difficulty,
        youtube_links=youtube_links or [],
        notes=notes,
    )
    conn = get_connection(db_path)
    position = conn.execute(
        "SELECT COUNT(*) FROM topics WHERE subject_id = ?", (subject_id,)
    ).fetchone()[0]
    _insert_topic(conn, subject_id, topic, position)
    conn.commit()
    conn.close()
    return topic.id


def save_subjects(db_path: str, subjects: list[Subject]) -> None:
    """Insert or update subjects and all their topics."""
    conn = get_connection(db_path)
    for subject in subjects:
        conn.execute(
            """INSERT INTO subjects (id, name, exam_date, daily_hours, created_at) VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET name=excluded.name, exam_date=excluded.exam_date,
                daily_hours=excluded.daily_hours""",
            (subject.id, subject.name, subject.exam_date, subject.daily_hours, datetime.now().isoformat()),
        )
        for position, topic in enumerate(subject.topics):
            _insert_topic(conn, subject.id, topic, position)
    conn.commit()
    conn.close()


def _row_to_topic(row) -> Topic:
    return Topic(
        id=row["id"],
        title=row["title"],
        estimated_hours=row["estimated_hours"],
        difficulty=row["difficulty"],
        completed=bool(row["completed"]),
        progress=row["progress"],
        youtube_links=json.loads(row["youtube_links"] or "[]"),
        notes=row["notes"] or "",
    )


def load_subjects(db_path: str) -> list[Subject]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM subjects ORDER BY created_at, name").fetchall()
    subjects = []
    for row in rows:
        topic_rows = conn.execute(
            "SELECT * FROM topics WHERE subject_id = ? ORDER BY position", (row["id"],)
        ).fetchall()
        subject = Subject(
            id=row["id"],
            name=row["name"],
            exam_date=row["exam_date"],
            topics=[_row_to_topic(t) for t in topic_rows],
            daily_hours=row["daily_hours"],
        )
        subject.progress = calc_subject_progress(subject)
        subjects.append(subject)
    conn.close()
    return subjects


def _write_plan(db_path: str, plan_type: str, data: str, plan_id: int | None) -> int:
    conn = get_connection(db_path)
    if plan_id is None:
        cur = conn.execute(
            "INSERT INTO study_plans (plan_type, plan_data, created_at) VALUES (?, ?, ?)",
            (plan_type, data, datetime.now().isoformat()),
        )
        plan_id = cur.lastrowid
    else:
        conn.execute("UPDATE study_plans SET plan_data = ? WHERE id = ?", (data, plan_id))
    conn.commit()
    conn.close()
    return plan_id


def save_plan(db_path: str, plan: SchedulePlan, plan_id: int | None = None) -> int:
    """Store a daily plan snapshot; with plan_id, overwrite that snapshot instead."""
    return _write_plan(db_path, "daily", json.dumps(plan_to_dict(plan)), plan_id)


def save_exam_timetable(db_path: str, timetable: ExamTimetable) -> int:
    return _write_plan(db_path, "exam", json.dumps(timetable_to_dict(timetable)), None)


def _latest_plan_data(db_path: str, plan_type: str):
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT id, plan_data FROM study_plans WHERE plan_type = ? ORDER BY id DESC LIMIT 1",
        (plan_type,),
    ).fetchone()
    conn.close()
    return row


def get_latest_plan(db_path: str) -> tuple[int, SchedulePlan] | None:
    row = _latest_plan_data(db_path, "daily")
    if not row:
        return None
    return row["id"], plan_from_dict(json.loads(row["plan_data"]))


def get_latest_exam_timetable(db_path: str) -> ExamTimetable | None:
    row = _latest_plan_data(db_path, "exam")
    if not row:
        return None
    return timetable_from_dict(json.loads(row["plan_data"]))


def count_plans(db_path: str) -> int:
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM study_plans").fetchone()[0]
    conn.close()
    return count


def record_completed_task(db_path: str, record: CompletedTask) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO completed_tasks (task_data, completed_at) VALUES (?, ?)",
        (json.dumps(task_to_dict(record.task)), record.completed_at),
    )
    conn.commit()
    conn.close()


def get_completed_tasks(db_path: str) -> list[CompletedTask]:
    """Completion history, newest first."""
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT task_data, completed_at FROM completed_tasks ORDER BY completed_at DESC, id DESC"
    ).fetchall()
    conn.close()
    return [
        CompletedTask(task=task_from_dict(json.loads(r["task_data"])), completed_at=r["completed_at"])
        for r in rows
    ]
