"""Subject snapshot import and schedule export."""
import csv
import io
import json
from pathlib import Path

import yaml

from study_planner.models import SchedulePlan, Subject, subject_from_dict

CSV_HEADERS = ["Date", "Subject", "Topic", "Estimated Hours", "Difficulty", "Status"]


def read_subjects_data(file_path: str) -> dict:
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return json.loads(path.read_text())
    elif suffix in (".yaml", ".yml"):
        return yaml.safe_load(path.read_text()) or {}
    raise ValueError(f"Unsupported subjects file type: {suffix or path.name}")


def load_subjects_file(file_path: str) -> list[Subject]:
    """Load subjects (with nested topics) from a JSON or YAML file."""
    data = read_subjects_data(file_path)
    items = data.get("subjects", []) if isinstance(data, dict) else data
    return [subject_from_dict(item) for item in items]


def export_schedule_csv(plan: SchedulePlan) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for task in plan.daily_tasks:
        writer.writerow([
            task.date,
            task.subject_name,
            task.topic_title,
            task.estimated_hours,
            task.difficulty,
            "Completed" if task.completed else "Pending",
        ])
    return buf.getvalue()


def write_schedule_csv(plan: SchedulePlan, file_path: str) -> dict:
    path = Path(file_path)
    path.write_text(export_schedule_csv(plan))
    return {"filename": path.name, "rows": len(plan.daily_tasks)}
