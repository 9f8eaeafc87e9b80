"""Raw log models: what a user records day to day."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class WeightUnit(str, Enum):
    """Mass unit a weight was entered in."""

    KG = "kg"
    LB = "lb"


class MetricType(str, Enum):
    """How an exercise is measured."""

    WEIGHTED_REPS = "WEIGHTED_REPS"
    DURATION = "DURATION"


@dataclass
class SetLog:
    """A single weighted set joined with its session date and exercise.

    This is the scorer's input shape. ``weight`` is already in kilograms.
    """

    session_date: date
    exercise_name: str
    set_number: int
    reps: int
    weight: float
    muscle_group: str | None = None


@dataclass
class Exercise:
    """An exercise in the user's library."""

    name: str
    muscle_group: str | None = None
    split: str | None = None
    metric_type: MetricType = MetricType.WEIGHTED_REPS
    sort_order: int = 0
    is_active: bool = True
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "muscle_group": self.muscle_group,
            "split": self.split,
            "metric_type": self.metric_type.value,
            "sort_order": self.sort_order,
            "is_active": self.is_active,
        }


@dataclass
class WorkoutSession:
    """A training session: one per user, date and split."""

    session_date: date
    split: str = ""
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "session_date": self.session_date.isoformat(),
            "split": self.split,
        }


@dataclass
class WorkoutSet:
    """A set as stored, in the unit the user typed it."""

    session_id: int
    exercise_id: int
    set_number: int
    reps: int | None = None
    weight_input: float | None = None
    unit_input: WeightUnit = WeightUnit.LB
    weight_kg: float | None = None
    duration_seconds: int | None = None
    id: int | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "session_id": self.session_id,
            "exercise_id": self.exercise_id,
            "set_number": self.set_number,
            "reps": self.reps,
            "weight_input": self.weight_input,
            "unit_input": self.unit_input.value,
            "weight_kg": self.weight_kg,
            "duration_seconds": self.duration_seconds,
        }


@dataclass
class BodyweightLog:
    """One bodyweight reading for a day."""

    log_date: date
    weight_input: float
    unit_input: WeightUnit = WeightUnit.LB
    weight_kg: float | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "log_date": self.log_date.isoformat(),
            "weight_input": self.weight_input,
            "unit_input": self.unit_input.value,
            "weight_kg": self.weight_kg,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "BodyweightLog":
        """Create from dictionary."""
        log_date = data["log_date"]
        if isinstance(log_date, str):
            log_date = date.fromisoformat(log_date)
        return cls(
            id=id,
            log_date=log_date,
            weight_input=float(data["weight_input"]),
            unit_input=WeightUnit(data.get("unit_input", "lb")),
            weight_kg=data.get("weight_kg"),
        )


@dataclass
class CaloriesLog:
    """Calorie intake for a day, split around the workout."""

    log_date: date
    pre_workout_kcal: float | None = None
    post_workout_kcal: float | None = None
    id: int | None = None

    @property
    def total_kcal(self) -> float | None:
        """Total kilocalories, or None when neither half was logged."""
        if self.pre_workout_kcal is None and self.post_workout_kcal is None:
            return None
        return (self.pre_workout_kcal or 0) + (self.post_workout_kcal or 0)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "log_date": self.log_date.isoformat(),
            "pre_workout_kcal": self.pre_workout_kcal,
            "post_workout_kcal": self.post_workout_kcal,
            "total_kcal": self.total_kcal,
        }

    @classmethod
    def from_dict(cls, data: dict, id: int | None = None) -> "CaloriesLog":
        """Create from dictionary."""
        log_date = data["log_date"]
        if isinstance(log_date, str):
            log_date = date.fromisoformat(log_date)
        return cls(
            id=id,
            log_date=log_date,
            pre_workout_kcal=data.get("pre_workout_kcal"),
            post_workout_kcal=data.get("post_workout_kcal"),
        )
