"""Tests for the dashboard loader service."""

import asyncio
from datetime import date

from gainsight.db.repositories import BodyweightRepository, WorkoutRepository
from gainsight.models.logs import BodyweightLog, WeightUnit
from gainsight.services.dashboard import DashboardService


async def seed(db_path, user_id="u1"):
    """Three sessions over two splits and two weigh-ins."""
    workouts = WorkoutRepository(db_path)
    await workouts.get_or_create_session(user_id, date(2024, 2, 1), "push")
    await workouts.get_or_create_session(user_id, date(2024, 2, 3), "legs")
    await workouts.get_or_create_session(user_id, date(2024, 2, 5), "push")

    bodyweight = BodyweightRepository(db_path)
    await bodyweight.upsert(user_id, BodyweightLog(date(2024, 2, 1), 180, WeightUnit.LB))
    await bodyweight.upsert(user_id, BodyweightLog(date(2024, 2, 4), 179, WeightUnit.LB))


class TestDashboardService:
    """Tests for DashboardService.load."""

    def test_counts_and_latest(self, db_path):
        """Test counts, the newest session and the newest weigh-in."""
        asyncio.run(seed(db_path))

        result = asyncio.run(DashboardService(db_path).load("u1", as_of=date(2024, 2, 6)))

        assert result.ok
        summary = result.summary
        assert summary.workout_count == 3
        assert summary.bodyweight_count == 2
        assert summary.latest_workout.session_date == date(2024, 2, 5)
        assert summary.latest_workout.split == "push"
        assert summary.latest_bodyweight.weight_input == 179

    def test_last_session_per_split(self, db_path):
        """Test each split reports its last session and how long ago it was."""
        asyncio.run(seed(db_path))

        result = asyncio.run(DashboardService(db_path).load("u1", as_of=date(2024, 2, 6)))

        last = {s.split: (s.session_date, s.days_ago) for s in result.summary.last_session_by_split}
        assert last == {
            "legs": (date(2024, 2, 3), 3),
            "push": (date(2024, 2, 5), 1),
        }

    def test_recent_sessions_only_with_split(self, db_path):
        """Test recent sessions are listed for the requested split."""
        asyncio.run(seed(db_path))
        service = DashboardService(db_path)

        without = asyncio.run(service.load("u1"))
        with_split = asyncio.run(service.load("u1", split="push"))

        assert without.summary.recent_sessions == []
        assert [s.session_date for s in with_split.summary.recent_sessions] == [
            date(2024, 2, 5),
            date(2024, 2, 1),
        ]

    def test_new_user(self, db_path):
        """Test a user with nothing logged gets zero counts."""
        result = asyncio.run(DashboardService(db_path).load("nobody"))

        data = result.to_dict()
        assert data["status"] == "ok"
        assert data["workout_count"] == 0
        assert data["latest_workout"] is None
        assert data["latest_bodyweight"] is None
        assert data["last_session_by_split"] == []

    def test_fetch_failure_is_reported(self, temp_db_path):
        """Test a database without tables gives an error result."""
        result = asyncio.run(DashboardService(temp_db_path).load("u1"))

        assert result.status == "error"
        assert "Failed to load dashboard" in result.message
