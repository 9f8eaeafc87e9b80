"""Insights loader: fetch a user's raw logs and run the insights engine."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import aiosqlite

from .. import config
from ..db.repositories import BodyweightRepository, CaloriesRepository, WorkoutRepository
from ..engine.insights_view import build_insights_view
from ..engine.series import aggregate_session_strength_by_date, normalize_series
from ..engine.strength import compute_session_strength_by_exercise_date
from ..models.insights import AggregationMode, InsightsView, MetricPoint, SessionStrength
from ..models.logs import BodyweightLog, CaloriesLog
from ..utils.units import to_kg

logger = logging.getLogger(__name__)


@dataclass
class InsightsLoadResult:
    """Outcome of loading insights for one user."""

    status: str  # "ok" or "error"
    view: InsightsView | None = None
    bodyweight_series: list[MetricPoint] = field(default_factory=list)
    calories_series: list[MetricPoint] = field(default_factory=list)
    strength_series: list[MetricPoint] = field(default_factory=list)
    session_scores: list[SessionStrength] = field(default_factory=list)
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        if not self.ok:
            return {"status": self.status, "message": self.message}

        data = {"status": self.status}
        data.update(self.view.to_dict() if self.view else {})
        data["bodyweight_series"] = [p.to_dict() for p in self.bodyweight_series]
        data["calories_series"] = [p.to_dict() for p in self.calories_series]
        data["strength_series"] = [p.to_dict() for p in self.strength_series]
        return data


def bodyweight_series(logs: list[BodyweightLog]) -> list[MetricPoint]:
    """Bodyweight in kilograms per date."""
    points = [
        MetricPoint(
            date=log.log_date,
            value=log.weight_kg if log.weight_kg is not None else to_kg(log.weight_input, log.unit_input),
        )
        for log in logs
    ]
    return normalize_series(points, AggregationMode.AVERAGE)


def calories_series(logs: list[CaloriesLog]) -> list[MetricPoint]:
    """Total kilocalories (pre + post workout) per date."""
    points = [MetricPoint(date=log.log_date, value=log.total_kcal) for log in logs]
    return normalize_series(points, AggregationMode.SUM)


class InsightsService:
    """Service that builds the insights payload for a user."""

    def __init__(
        self,
        db_path: Path | None = None,
        mode: AggregationMode = config.STRENGTH_AGGREGATION_MODE,
    ):
        """Initialize the insights service.

        Args:
            db_path: Database to read raw logs from
            mode: How per-exercise session scores combine into a daily value
        """
        self.mode = AggregationMode(mode)
        self.bodyweight_repo = BodyweightRepository(db_path)
        self.calories_repo = CaloriesRepository(db_path)
        self.workout_repo = WorkoutRepository(db_path)

    async def load(self, user_id: str, as_of: date | None = None) -> InsightsLoadResult:
        """Fetch the user's logs concurrently and build their insights.

        Args:
            user_id: Whose logs to read
            as_of: Reference day for trailing windows (defaults to today)

        Returns:
            InsightsLoadResult with status "ok", or "error" if any fetch failed
        """
        try:
            bodyweight_logs, calories_logs, set_logs = await asyncio.gather(
                self.bodyweight_repo.list_for_user(user_id),
                self.calories_repo.list_for_user(user_id),
                self.workout_repo.list_set_logs(user_id),
            )
        except aiosqlite.Error as e:
            logger.error("Failed to load logs for user %s: %s", user_id, e)
            return InsightsLoadResult(status="error", message=f"Failed to load insights: {e}")

        logger.debug(
            "Loaded %d bodyweight, %d calorie and %d set logs for user %s",
            len(bodyweight_logs),
            len(calories_logs),
            len(set_logs),
            user_id,
        )

        session_scores = compute_session_strength_by_exercise_date(set_logs)
        strength = aggregate_session_strength_by_date(session_scores, self.mode)
        bodyweight = bodyweight_series(bodyweight_logs)
        calories = calories_series(calories_logs)

        view = build_insights_view(
            bodyweight,
            calories,
            strength,
            session_scores=session_scores,
            as_of=as_of or date.today(),
        )

        return InsightsLoadResult(
            status="ok",
            view=view,
            bodyweight_series=bodyweight,
            calories_series=calories,
            strength_series=strength,
            session_scores=session_scores,
        )
