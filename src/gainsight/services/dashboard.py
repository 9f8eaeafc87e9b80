"""Dashboard loader: counts, latest entries and last session per split."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import aiosqlite

from ..db.repositories import BodyweightRepository, WorkoutRepository
from ..models.dashboard import DashboardSummary, LastSession

logger = logging.getLogger(__name__)

RECENT_SESSION_LIMIT = 5


@dataclass
class DashboardLoadResult:
    """Outcome of loading the dashboard for one user."""

    status: str  # "ok" or "error"
    summary: DashboardSummary | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON responses."""
        if not self.ok:
            return {"status": self.status, "message": self.message}
        data = {"status": self.status}
        data.update(self.summary.to_dict())
        return data


class DashboardService:
    """Service that builds the dashboard summary for a user."""

    def __init__(self, db_path: Path | None = None):
        self.bodyweight_repo = BodyweightRepository(db_path)
        self.workout_repo = WorkoutRepository(db_path)

    async def _recent_sessions(self, user_id: str, split: str | None):
        if split is None:
            return []
        return await self.workout_repo.list_sessions(
            user_id, split=split, limit=RECENT_SESSION_LIMIT
        )

    async def load(
        self,
        user_id: str,
        split: str | None = None,
        as_of: date | None = None,
    ) -> DashboardLoadResult:
        """Fetch the dashboard queries concurrently.

        Args:
            user_id: Whose logs to read
            split: Also list the most recent sessions of this split
            as_of: Day that "days ago" is counted from (defaults to today)

        Returns:
            DashboardLoadResult with status "ok", or "error" if any query failed
        """
        as_of = as_of or date.today()

        try:
            (
                workout_count,
                bodyweight_count,
                latest_workout,
                latest_bodyweight,
                by_split,
                recent,
            ) = await asyncio.gather(
                self.workout_repo.count_sessions(user_id),
                self.bodyweight_repo.count(user_id),
                self.workout_repo.latest_session(user_id),
                self.bodyweight_repo.latest(user_id),
                self.workout_repo.latest_by_split(user_id),
                self._recent_sessions(user_id, split),
            )
        except aiosqlite.Error as e:
            logger.error("Failed to load dashboard for user %s: %s", user_id, e)
            return DashboardLoadResult(status="error", message=f"Failed to load dashboard: {e}")

        last_sessions = [
            LastSession(
                split=name,
                session_date=session.session_date,
                days_ago=(as_of - session.session_date).days,
            )
            for name, session in sorted(by_split.items())
        ]

        return DashboardLoadResult(
            status="ok",
            summary=DashboardSummary(
                workout_count=workout_count,
                bodyweight_count=bodyweight_count,
                latest_workout=latest_workout,
                latest_bodyweight=latest_bodyweight,
                last_session_by_split=last_sessions,
                split=split,
                recent_sessions=recent,
            ),
        )
