# tests/test_importer.py
import json

import pytest

from study_planner.importer import (
    CSV_HEADERS, export_schedule_csv, load_subjects_file, write_schedule_csv,
)
from study_planner.models import DailyTask, SchedulePlan

SUBJECTS = {
    "subjects": [
        {
            "id": "math",
            "name": "Math",
            "exam_date": "2025-02-01",
            "daily_hours": 3,
            "topics": [
                {"id": "t1", "title": "Limits", "estimated_hours": 4, "difficulty": "hard"},
                {"id": "t2", "title": "Sets", "estimated_hours": 1},
            ],
        }
    ]
}


def test_load_json_subjects(tmp_path):
    f = tmp_path / "subjects.json"
    f.write_text(json.dumps(SUBJECTS))
    subjects = load_subjects_file(str(f))
    assert len(subjects) == 1
    assert subjects[0].daily_hours == 3
    assert [t.title for t in subjects[0].topics] == ["Limits", "Sets"]
    # missing optional fields fall back to neutral values
    assert subjects[0].topics[1].difficulty == "medium"
    assert subjects[0].topics[1].youtube_links == []


def test_load_yaml_subjects_with_bare_date(tmp_path):
    f = tmp_path / "subjects.yaml"
    f.write_text(
        "subjects:\n"
        "  - id: bio\n"
        "    name: Biology\n"
        "    exam_date: 2025-03-15\n"
        "    topics:\n"
        "      - id: cells\n"
        "        title: Cells\n"
        "        estimated_hours: 2.5\n"
        "        youtube_links:\n"
        "          - \"https://example.com/cells\"\n"
    )
    subjects = load_subjects_file(str(f))
    assert subjects[0].exam_date == "2025-03-15"
    assert subjects[0].daily_hours == 2.0
    assert subjects[0].topics[0].youtube_links == ["https://example.com/cells"]


def test_load_unsupported_file(tmp_path):
    f = tmp_path / "subjects.txt"
    f.write_text("Math")
    with pytest.raises(ValueError):
        load_subjects_file(str(f))


def test_export_schedule_csv():
    plan = SchedulePlan(daily_tasks=[
        DailyTask(id="a", date="2025-01-06", topic_id="a", topic_title="Limits",
                  subject_name="Math", estimated_hours=2, difficulty="hard", completed=True),
        DailyTask(id="b", date="2025-01-07", topic_id="b", topic_title="Sets, intro",
                  subject_name="Math", estimated_hours=0.5, difficulty="easy"),
    ])
    lines = export_schedule_csv(plan).splitlines()
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == "2025-01-06,Math,Limits,2,hard,Completed"
    assert lines[2] == '2025-01-07,Math,"Sets, intro",0.5,easy,Pending'


def test_write_schedule_csv(tmp_path):
    out = tmp_path / "plan.csv"
    result = write_schedule_csv(SchedulePlan(), str(out))
    assert result == {"filename": "plan.csv", "rows": 0}
    assert out.read_text().startswith("Date,Subject")
