from datetime import date

import pytest

TODAY = date(2025, 1, 6)  # a Monday


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_planner.db")
    return db_path


@pytest.fixture
def today():
    """Fixed 'as of' date so schedules are deterministic."""
    return TODAY
