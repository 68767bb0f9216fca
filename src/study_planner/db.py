"""Database initialization and connection management."""
import os
import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = str(Path.home() / ".study_planner" / "planner.db")
DB_PATH_ENV = "STUDY_PLANNER_DB"

SCHEMA = """
CREATE TABLE IF NOT EXISTS subjects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    exam_date TEXT,
    daily_hours REAL NOT NULL DEFAULT 2,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS topics (
    id TEXT NOT NULL,
    subject_id TEXT NOT NULL REFERENCES subjects(id) ON DELETE CASCADE,
    title TEXT NOT NULL,
    estimated_hours REAL NOT NULL DEFAULT 0,
    difficulty TEXT NOT NULL DEFAULT 'medium',
    completed INTEGER DEFAULT 0,
    progress INTEGER DEFAULT 0,
    youtube_links TEXT DEFAULT '[]',
    notes TEXT,
    position INTEGER DEFAULT 0,
    PRIMARY KEY (subject_id, id)
);

CREATE TABLE IF NOT EXISTS study_plans (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    plan_type TEXT NOT NULL CHECK(plan_type IN ('daily', 'exam')),
    plan_data TEXT NOT NULL,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS completed_tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_data TEXT NOT NULL,
    completed_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS user_settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    key TEXT NOT NULL UNIQUE,
    value TEXT
);
"""


def resolve_db_path() -> str:
    """The database path, honouring the STUDY_PLANNER_DB override."""
    return os.environ.get(DB_PATH_ENV) or DEFAULT_DB_PATH


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
