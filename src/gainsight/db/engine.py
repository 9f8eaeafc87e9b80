"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from .. import config

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = config.DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "gainsight.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    logger.info("Initializing database at %s", db_path)

    async with aiosqlite.connect(db_path) as db:
        # Exercise library, one per user and name
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                muscle_group TEXT,
                split TEXT,
                metric_type TEXT NOT NULL DEFAULT 'WEIGHTED_REPS',
                sort_order INTEGER DEFAULT 0,
                is_active INTEGER DEFAULT 1,
                UNIQUE (user_id, name)
            )
        """)

        # One session per user, date and split
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                session_date TEXT NOT NULL,
                split TEXT NOT NULL DEFAULT '',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, session_date, split)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                session_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                set_number INTEGER NOT NULL,
                reps INTEGER,
                weight_input REAL,
                unit_input TEXT DEFAULT 'lb',
                weight_kg REAL,
                duration_seconds INTEGER,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (session_id, exercise_id, set_number),
                FOREIGN KEY (session_id) REFERENCES workout_sessions(id) ON DELETE CASCADE,
                FOREIGN KEY (exercise_id) REFERENCES exercises(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS bodyweight_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                log_date TEXT NOT NULL,
                weight_input REAL NOT NULL,
                unit_input TEXT NOT NULL DEFAULT 'lb',
                weight_kg REAL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, log_date)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS calories_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                log_date TEXT NOT NULL,
                pre_workout_kcal REAL,
                post_workout_kcal REAL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, log_date)
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_sets_user
            ON workout_sets(user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_sessions_user_date
            ON workout_sessions(user_id, session_date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_bodyweight_logs_user_date
            ON bodyweight_logs(user_id, log_date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_calories_logs_user_date
            ON calories_logs(user_id, log_date)
        """)

        await db.commit()
