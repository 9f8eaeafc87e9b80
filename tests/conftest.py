"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import date
from pathlib import Path

import pytest

from gainsight.db.engine import init_db
from gainsight.models.logs import SetLog


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema created."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def bench_session():
    """Two Bench Press sets on one day."""
    return [
        SetLog(
            session_date=date(2024, 2, 1),
            exercise_name="Bench Press",
            muscle_group="chest",
            set_number=1,
            reps=5,
            weight=135,
        ),
        SetLog(
            session_date=date(2024, 2, 1),
            exercise_name="Bench Press",
            muscle_group="chest",
            set_number=2,
            reps=5,
            weight=140,
        ),
    ]
