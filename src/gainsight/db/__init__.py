"""Database layer for gainsight."""

from .engine import get_db_path, init_db
from .repositories import (
    BodyweightRepository,
    CaloriesRepository,
    ExerciseRepository,
    WorkoutRepository,
)

__all__ = [
    "BodyweightRepository",
    "CaloriesRepository",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "WorkoutRepository",
]
