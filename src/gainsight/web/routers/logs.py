"""Raw log routes: bodyweight, calories and workout sets."""

from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import JSONResponse

from ...db.repositories import (
    BodyweightRepository,
    CaloriesRepository,
    ExerciseRepository,
    WorkoutRepository,
)
from ...models.logs import BodyweightLog, CaloriesLog, WeightUnit, WorkoutSet
from ...utils.units import to_kg
from ..dependencies import get_db_path, get_user_id

router = APIRouter(prefix="/api", tags=["logs"])


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


def _not_found(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=404)


@router.get("/bodyweight")
async def list_bodyweight(
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """List bodyweight entries, oldest first."""
    entries = await BodyweightRepository(db_path).list_for_user(user_id)
    return {"entries": [e.to_dict() for e in entries]}


@router.post("/bodyweight")
async def save_bodyweight(
    log_date: date = Form(...),
    weight: float = Form(...),
    unit: str = Form("lb"),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Create or replace the bodyweight entry for a day."""
    try:
        entry = BodyweightLog(log_date=log_date, weight_input=weight, unit_input=WeightUnit(unit))
        entry_id = await BodyweightRepository(db_path).upsert(user_id, entry)
    except ValueError as e:
        return _bad_request(str(e))

    return {"status": "saved", "id": entry_id}


@router.delete("/bodyweight/{log_id}")
async def delete_bodyweight(
    log_id: int,
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Delete a bodyweight entry."""
    if not await BodyweightRepository(db_path).delete(user_id, log_id):
        return _not_found("Entry not found")
    return {"status": "deleted", "id": log_id}


@router.get("/calories")
async def list_calories(
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """List calorie entries, oldest first."""
    entries = await CaloriesRepository(db_path).list_for_user(user_id)
    return {"entries": [e.to_dict() for e in entries]}


@router.post("/calories")
async def save_calories(
    log_date: date = Form(...),
    pre_workout_kcal: float | None = Form(None),
    post_workout_kcal: float | None = Form(None),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Create or replace the calorie entry for a day."""
    if pre_workout_kcal is None and post_workout_kcal is None:
        return _bad_request("Provide pre_workout_kcal or post_workout_kcal")

    entry = CaloriesLog(
        log_date=log_date,
        pre_workout_kcal=pre_workout_kcal,
        post_workout_kcal=post_workout_kcal,
    )
    try:
        entry_id = await CaloriesRepository(db_path).upsert(user_id, entry)
    except ValueError as e:
        return _bad_request(str(e))

    return {"status": "saved", "id": entry_id}


@router.put("/calories/{log_id}")
async def update_calories(
    log_id: int,
    log_date: date = Form(...),
    pre_workout_kcal: float | None = Form(None),
    post_workout_kcal: float | None = Form(None),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Edit a calorie entry in place."""
    if pre_workout_kcal is None and post_workout_kcal is None:
        return _bad_request("Provide pre_workout_kcal or post_workout_kcal")

    entry = CaloriesLog(
        log_date=log_date,
        pre_workout_kcal=pre_workout_kcal,
        post_workout_kcal=post_workout_kcal,
    )
    try:
        updated = await CaloriesRepository(db_path).update(user_id, log_id, entry)
    except ValueError as e:
        return _bad_request(str(e))

    if not updated:
        return _not_found("Entry not found")
    return {"status": "updated", "id": log_id}


@router.delete("/calories/{log_id}")
async def delete_calories(
    log_id: int,
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Delete a calorie entry."""
    if not await CaloriesRepository(db_path).delete(user_id, log_id):
        return _not_found("Entry not found")
    return {"status": "deleted", "id": log_id}


@router.post("/workouts/sets")
async def save_set(
    session_date: date = Form(...),
    exercise: str = Form(...),
    set_number: int = Form(...),
    reps: int = Form(...),
    weight: float = Form(...),
    unit: str = Form("lb"),
    muscle_group: str | None = Form(None),
    split: str = Form(""),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Create or replace one weighted set."""
    try:
        exercise_id = await ExerciseRepository(db_path).get_or_create(
            user_id, exercise, muscle_group=muscle_group, split=split or None
        )
        workout_repo = WorkoutRepository(db_path)
        session_id = await workout_repo.get_or_create_session(user_id, session_date, split)
        workout_set = WorkoutSet(
            session_id=session_id,
            exercise_id=exercise_id,
            set_number=set_number,
            reps=reps,
            weight_input=weight,
            unit_input=WeightUnit(unit),
            weight_kg=to_kg(weight, unit),
        )
        workout_set.id = await workout_repo.upsert_set(user_id, workout_set)
    except ValueError as e:
        return _bad_request(str(e))

    return {
        "status": "saved",
        "id": workout_set.id,
        "session_id": session_id,
        "set": workout_set.to_dict(),
    }


@router.get("/workouts/sessions")
async def list_sessions(
    split: str | None = Query(None),
    limit: int = Query(5, ge=1),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Recent workout sessions, newest first, optionally for one split."""
    sessions = await WorkoutRepository(db_path).list_sessions(user_id, split=split, limit=limit)
    return {"sessions": [s.to_dict() for s in sessions]}


@router.delete("/workouts/sessions/{session_id}")
async def delete_session(
    session_id: int,
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """Delete a workout session and all of its sets."""
    if not await WorkoutRepository(db_path).delete_session(user_id, session_id):
        return _not_found("Session not found")
    return {"status": "deleted", "id": session_id}


@router.get("/exercises")
async def list_exercises(
    include_inactive: bool = Query(False),
    user_id: str = Depends(get_user_id),
    db_path: Path = Depends(get_db_path),
):
    """The user's exercise library in display order."""
    exercises = await ExerciseRepository(db_path).list_for_user(
        user_id, active_only=not include_inactive
    )
    return {"exercises": [e.to_dict() for e in exercises]}
