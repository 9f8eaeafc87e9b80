"""Data access layer for gainsight.

Every query is scoped by an explicit ``user_id``; nothing here knows who is
logged in.
"""

import logging
from datetime import date
from pathlib import Path

import aiosqlite

from ..models.logs import (
    BodyweightLog,
    CaloriesLog,
    Exercise,
    MetricType,
    SetLog,
    WeightUnit,
    WorkoutSession,
    WorkoutSet,
)
from ..utils.units import to_kg
from .engine import get_db_path

logger = logging.getLogger(__name__)


class BodyweightRepository:
    """Repository for bodyweight logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def upsert(self, user_id: str, log: BodyweightLog) -> int:
        """Create or replace the bodyweight entry for a day.

        Raises:
            ValueError: If the weight is not positive or the unit is unknown
        """
        if log.weight_input is None or log.weight_input <= 0:
            raise ValueError("Bodyweight must be greater than zero")

        unit = WeightUnit(log.unit_input)
        weight_kg = log.weight_kg
        if weight_kg is None:
            weight_kg = to_kg(log.weight_input, unit)

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO bodyweight_logs
                (user_id, log_date, weight_input, unit_input, weight_kg)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (user_id, log_date) DO UPDATE SET
                    weight_input = excluded.weight_input,
                    unit_input = excluded.unit_input,
                    weight_kg = excluded.weight_kg
                """,
                (user_id, log.log_date.isoformat(), log.weight_input, unit.value, weight_kg),
            )
            await db.commit()
            cursor = await db.execute(
                "SELECT id FROM bodyweight_logs WHERE user_id = ? AND log_date = ?",
                (user_id, log.log_date.isoformat()),
            )
            row = await cursor.fetchone()
            return row[0]

    async def list_for_user(self, user_id: str) -> list[BodyweightLog]:
        """List a user's bodyweight logs, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM bodyweight_logs
                WHERE user_id = ?
                ORDER BY log_date ASC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [BodyweightLog.from_dict(dict(row), id=row["id"]) for row in rows]

    async def count(self, user_id: str) -> int:
        """Number of bodyweight entries a user has logged."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM bodyweight_logs WHERE user_id = ?",
                (user_id,),
            )
            row = await cursor.fetchone()
            return row[0]

    async def latest(self, user_id: str) -> BodyweightLog | None:
        """Most recent bodyweight entry, or None if there is none."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM bodyweight_logs
                WHERE user_id = ?
                ORDER BY log_date DESC
                LIMIT 1
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return BodyweightLog.from_dict(dict(row), id=row["id"])

    async def delete(self, user_id: str, log_id: int) -> bool:
        """Delete a bodyweight log. Returns False if nothing matched."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM bodyweight_logs WHERE id = ? AND user_id = ?",
                (log_id, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0


class CaloriesRepository:
    """Repository for calorie logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    @staticmethod
    def _validate(log: CaloriesLog) -> None:
        for value in (log.pre_workout_kcal, log.post_workout_kcal):
            if value is not None and value < 0:
                raise ValueError("Calories cannot be negative")

    async def upsert(self, user_id: str, log: CaloriesLog) -> int:
        """Create or replace the calorie entry for a day."""
        self._validate(log)
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO calories_logs
                (user_id, log_date, pre_workout_kcal, post_workout_kcal)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (user_id, log_date) DO UPDATE SET
                    pre_workout_kcal = excluded.pre_workout_kcal,
                    post_workout_kcal = excluded.post_workout_kcal
                """,
                (
                    user_id,
                    log.log_date.isoformat(),
                    log.pre_workout_kcal,
                    log.post_workout_kcal,
                ),
            )
            await db.commit()
            cursor = await db.execute(
                "SELECT id FROM calories_logs WHERE user_id = ? AND log_date = ?",
                (user_id, log.log_date.isoformat()),
            )
            row = await cursor.fetchone()
            return row[0]

    async def update(self, user_id: str, log_id: int, log: CaloriesLog) -> bool:
        """Update an existing calorie log in place."""
        self._validate(log)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE calories_logs SET
                    log_date = ?, pre_workout_kcal = ?, post_workout_kcal = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    log.log_date.isoformat(),
                    log.pre_workout_kcal,
                    log.post_workout_kcal,
                    log_id,
                    user_id,
                ),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def list_for_user(self, user_id: str) -> list[CaloriesLog]:
        """List a user's calorie logs, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM calories_logs
                WHERE user_id = ?
                ORDER BY log_date ASC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()
            return [CaloriesLog.from_dict(dict(row), id=row["id"]) for row in rows]

    async def delete(self, user_id: str, log_id: int) -> bool:
        """Delete a calorie log. Returns False if nothing matched."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "DELETE FROM calories_logs WHERE id = ? AND user_id = ?",
                (log_id, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0


class ExerciseRepository:
    """Repository for a user's exercise library."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_or_create(
        self,
        user_id: str,
        name: str,
        muscle_group: str | None = None,
        split: str | None = None,
    ) -> int:
        """Get an exercise id by name, creating the exercise if needed."""
        name = name.strip()
        if not name:
            raise ValueError("Exercise name is required")

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT id FROM exercises WHERE user_id = ? AND name = ?",
                (user_id, name),
            )
            row = await cursor.fetchone()
            if row is not None:
                return row[0]

            cursor = await db.execute(
                """
                INSERT INTO exercises (user_id, name, muscle_group, split, metric_type)
                VALUES (?, ?, ?, ?, ?)
                """,
                (user_id, name, muscle_group, split, MetricType.WEIGHTED_REPS.value),
            )
            await db.commit()
            logger.debug("Created exercise %r for user %s", name, user_id)
            return cursor.lastrowid

    async def list_for_user(self, user_id: str, active_only: bool = True) -> list[Exercise]:
        """List a user's exercises in display order."""
        query = "SELECT * FROM exercises WHERE user_id = ?"
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY sort_order, name"

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, (user_id,))
            rows = await cursor.fetchall()
            return [
                Exercise(
                    id=row["id"],
                    name=row["name"],
                    muscle_group=row["muscle_group"],
                    split=row["split"],
                    metric_type=MetricType(row["metric_type"]),
                    sort_order=row["sort_order"],
                    is_active=bool(row["is_active"]),
                )
                for row in rows
            ]


class WorkoutRepository:
    """Repository for workout sessions and their sets."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_or_create_session(
        self, user_id: str, session_date: date, split: str = ""
    ) -> int:
        """Get the session for a date and split, creating it if needed."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT OR IGNORE INTO workout_sessions (user_id, session_date, split)
                VALUES (?, ?, ?)
                """,
                (user_id, session_date.isoformat(), split),
            )
            await db.commit()
            cursor = await db.execute(
                """
                SELECT id FROM workout_sessions
                WHERE user_id = ? AND session_date = ? AND split = ?
                """,
                (user_id, session_date.isoformat(), split),
            )
            row = await cursor.fetchone()
            return row[0]

    async def upsert_set(self, user_id: str, workout_set: WorkoutSet) -> int:
        """Create or replace a set, keyed by session, exercise and set number.

        Raises:
            ValueError: If set number, reps or weight are out of range
        """
        if workout_set.set_number < 1:
            raise ValueError("Set number must be at least 1")
        if workout_set.reps is not None and workout_set.reps < 0:
            raise ValueError("Reps cannot be negative")
        if workout_set.weight_input is not None and workout_set.weight_input < 0:
            raise ValueError("Weight cannot be negative")

        unit = WeightUnit(workout_set.unit_input)
        weight_kg = workout_set.weight_kg
        if weight_kg is None and workout_set.weight_input is not None:
            weight_kg = to_kg(workout_set.weight_input, unit)

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO workout_sets
                (user_id, session_id, exercise_id, set_number, reps,
                 weight_input, unit_input, weight_kg, duration_seconds)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (session_id, exercise_id, set_number) DO UPDATE SET
                    reps = excluded.reps,
                    weight_input = excluded.weight_input,
                    unit_input = excluded.unit_input,
                    weight_kg = excluded.weight_kg,
                    duration_seconds = excluded.duration_seconds,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (
                    user_id,
                    workout_set.session_id,
                    workout_set.exercise_id,
                    workout_set.set_number,
                    workout_set.reps,
                    workout_set.weight_input,
                    unit.value,
                    weight_kg,
                    workout_set.duration_seconds,
                ),
            )
            await db.commit()
            cursor = await db.execute(
                """
                SELECT id FROM workout_sets
                WHERE session_id = ? AND exercise_id = ? AND set_number = ?
                """,
                (workout_set.session_id, workout_set.exercise_id, workout_set.set_number),
            )
            row = await cursor.fetchone()
            return row[0]

    async def list_set_logs(self, user_id: str) -> list[SetLog]:
        """List a user's weighted sets joined with session date and exercise.

        Weights come back in kilograms. Sets without reps or weight (timed
        sets) are skipped.
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT s.session_date, e.name AS exercise_name, e.muscle_group,
                       ws.set_number, ws.reps, ws.weight_input, ws.unit_input,
                       ws.weight_kg
                FROM workout_sets ws
                JOIN workout_sessions s ON s.id = ws.session_id
                JOIN exercises e ON e.id = ws.exercise_id
                WHERE ws.user_id = ?
                  AND ws.reps IS NOT NULL
                  AND ws.weight_input IS NOT NULL
                ORDER BY s.session_date ASC, e.name ASC, ws.set_number ASC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()

        logs = []
        for row in rows:
            weight = row["weight_kg"]
            if weight is None:
                weight = to_kg(row["weight_input"], row["unit_input"] or WeightUnit.LB)
            logs.append(
                SetLog(
                    session_date=date.fromisoformat(row["session_date"]),
                    exercise_name=row["exercise_name"],
                    muscle_group=row["muscle_group"],
                    set_number=row["set_number"],
                    reps=row["reps"],
                    weight=weight,
                )
            )
        return logs

    async def count_sessions(self, user_id: str) -> int:
        """Number of workout sessions a user has logged."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM workout_sessions WHERE user_id = ?",
                (user_id,),
            )
            row = await cursor.fetchone()
            return row[0]

    async def list_sessions(
        self, user_id: str, split: str | None = None, limit: int | None = None
    ) -> list[WorkoutSession]:
        """List sessions newest first, optionally for one split only."""
        query = "SELECT id, session_date, split FROM workout_sessions WHERE user_id = ?"
        params: list = [user_id]
        if split is not None:
            query += " AND split = ?"
            params.append(split)
        query += " ORDER BY session_date DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [
                WorkoutSession(
                    id=row["id"],
                    session_date=date.fromisoformat(row["session_date"]),
                    split=row["split"],
                )
                for row in rows
            ]

    async def latest_session(self, user_id: str) -> WorkoutSession | None:
        """Most recent session of any split."""
        sessions = await self.list_sessions(user_id, limit=1)
        return sessions[0] if sessions else None

    async def latest_by_split(self, user_id: str) -> dict[str, WorkoutSession]:
        """Most recent session of each split, keyed by split name."""
        latest: dict[str, WorkoutSession] = {}
        for session in await self.list_sessions(user_id):
            latest.setdefault(session.split, session)
        return latest

    async def delete_session(self, user_id: str, session_id: int) -> bool:
        """Delete a session and its sets."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("PRAGMA foreign_keys = ON")
            cursor = await db.execute(
                "DELETE FROM workout_sessions WHERE id = ? AND user_id = ?",
                (session_id, user_id),
            )
            await db.commit()
            return cursor.rowcount > 0
