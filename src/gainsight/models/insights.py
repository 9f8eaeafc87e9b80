"""Insights data models.

Everything here is a read-only projection computed from raw logs on every
request. Nothing is persisted.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class AggregationMode(str, Enum):
    """How per-exercise session scores combine into one daily value."""

    SUM = "sum"  # Full-body daily load
    MAX = "max"  # Peak single-exercise score
    AVERAGE = "average"


@dataclass
class SessionStrength:
    """Strength score for one exercise on one day."""

    date: date
    exercise_name: str
    session_strength: float
    set_summary: str
    muscle_group: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "date": self.date.isoformat(),
            "exercise_name": self.exercise_name,
            "muscle_group": self.muscle_group,
            "session_strength": self.session_strength,
            "set_summary": self.set_summary,
        }


@dataclass
class MetricPoint:
    """A dated reading. ``value`` is None when nothing was recorded."""

    date: date
    value: float | None

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass
class CorrelationResult:
    """Pearson correlation between two aligned series."""

    label: str
    value: float | None
    interpretation: str
    overlap_days: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "label": self.label,
            "value": self.value,
            "interpretation": self.interpretation,
            "overlap_days": self.overlap_days,
        }


@dataclass
class InsightFact:
    """A summary statistic ready for display."""

    label: str
    value: str
    detail: str

    def to_dict(self) -> dict:
        return {"label": self.label, "value": self.value, "detail": self.detail}


@dataclass
class Achievement:
    """A milestone found in the full history."""

    period: str
    title: str
    detail: str

    def to_dict(self) -> dict:
        return {"period": self.period, "title": self.title, "detail": self.detail}


@dataclass
class InsightsView:
    """The analytical payload shown on the insights page."""

    facts: list[InsightFact] = field(default_factory=list)
    correlations: list[CorrelationResult] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    achievements: list[Achievement] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        return {
            "facts": [f.to_dict() for f in self.facts],
            "correlations": [c.to_dict() for c in self.correlations],
            "improvements": list(self.improvements),
            "achievements": [a.to_dict() for a in self.achievements],
            "suggestions": list(self.suggestions),
        }
