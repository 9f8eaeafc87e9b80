"""Insights engine: strength scoring, series aggregation and the insights view."""

from .insights_view import build_insights_view
from .series import (
    aggregate_session_strength_by_date,
    align_series,
    correlate,
    normalize_series,
)
from .strength import compute_session_strength_by_exercise_date, estimated_one_rep_max

__all__ = [
    "aggregate_session_strength_by_date",
    "align_series",
    "build_insights_view",
    "compute_session_strength_by_exercise_date",
    "correlate",
    "estimated_one_rep_max",
    "normalize_series",
]
