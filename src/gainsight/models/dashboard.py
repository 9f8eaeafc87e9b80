"""Dashboard summary models."""

from dataclasses import dataclass, field
from datetime import date

from .logs import BodyweightLog, WorkoutSession


@dataclass
class LastSession:
    """Most recent session of one split, for the "Previous:" hint when logging."""

    split: str
    session_date: date
    days_ago: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "split": self.split,
            "session_date": self.session_date.isoformat(),
            "days_ago": self.days_ago,
        }


@dataclass
class DashboardSummary:
    """Counts and latest entries shown on the dashboard."""

    workout_count: int = 0
    bodyweight_count: int = 0
    latest_workout: WorkoutSession | None = None
    latest_bodyweight: BodyweightLog | None = None
    last_session_by_split: list[LastSession] = field(default_factory=list)
    split: str | None = None
    recent_sessions: list[WorkoutSession] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "workout_count": self.workout_count,
            "bodyweight_count": self.bodyweight_count,
            "latest_workout": self.latest_workout.to_dict() if self.latest_workout else None,
            "latest_bodyweight": (
                self.latest_bodyweight.to_dict() if self.latest_bodyweight else None
            ),
            "last_session_by_split": [s.to_dict() for s in self.last_session_by_split],
            "split": self.split,
            "recent_sessions": [s.to_dict() for s in self.recent_sessions],
        }
