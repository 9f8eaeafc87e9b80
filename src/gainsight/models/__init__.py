"""Data models for gainsight."""

from .dashboard import DashboardSummary, LastSession
from .insights import (
    Achievement,
    AggregationMode,
    CorrelationResult,
    InsightFact,
    InsightsView,
    MetricPoint,
    SessionStrength,
)
from .logs import (
    BodyweightLog,
    CaloriesLog,
    Exercise,
    MetricType,
    SetLog,
    WeightUnit,
    WorkoutSession,
    WorkoutSet,
)

__all__ = [
    "Achievement",
    "AggregationMode",
    "BodyweightLog",
    "CaloriesLog",
    "CorrelationResult",
    "DashboardSummary",
    "Exercise",
    "InsightFact",
    "InsightsView",
    "LastSession",
    "MetricPoint",
    "MetricType",
    "SessionStrength",
    "SetLog",
    "WeightUnit",
    "WorkoutSession",
    "WorkoutSet",
]
