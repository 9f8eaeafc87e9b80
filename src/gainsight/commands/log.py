"""Commands for logging workouts, bodyweight and calories."""

from datetime import date

import click

from ..db.repositories import (
    BodyweightRepository,
    CaloriesRepository,
    ExerciseRepository,
    WorkoutRepository,
)
from ..models.logs import BodyweightLog, CaloriesLog, WeightUnit, WorkoutSet
from ..utils.units import format_number, from_kg
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_user_id,
    parse_date,
)

UNIT_CHOICE = click.Choice([u.value for u in WeightUnit])


@click.group()
def log():
    """Log workouts, bodyweight and calories."""
    pass


@log.command("bodyweight")
@click.argument("weight", type=float)
@click.option("-u", "--unit", type=UNIT_CHOICE, default="lb", show_default=True)
@click.option("-d", "--date", "log_date", callback=parse_date, help="Day (YYYY-MM-DD), default today")
@click.pass_context
@async_command
async def log_bodyweight(ctx: click.Context, weight: float, unit: str, log_date: date | None):
    """Record bodyweight for a day (replaces that day's entry)."""
    ensure_initialized(ctx)
    user_id = get_user_id(ctx)

    entry = BodyweightLog(
        log_date=log_date or date.today(),
        weight_input=weight,
        unit_input=WeightUnit(unit),
    )
    try:
        await BodyweightRepository().upsert(user_id, entry)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"Bodyweight {format_number(weight)} {unit} logged for {entry.log_date}")


@log.command("calories")
@click.option("--pre", "pre_kcal", type=float, help="Pre-workout kcal")
@click.option("--post", "post_kcal", type=float, help="Post-workout kcal")
@click.option("-d", "--date", "log_date", callback=parse_date, help="Day (YYYY-MM-DD), default today")
@click.pass_context
@async_command
async def log_calories(
    ctx: click.Context,
    pre_kcal: float | None,
    post_kcal: float | None,
    log_date: date | None,
):
    """Record calorie intake for a day (replaces that day's entry)."""
    ensure_initialized(ctx)

    if pre_kcal is None and post_kcal is None:
        echo_error("Give at least one of --pre or --post.")
        ctx.exit(1)

    entry = CaloriesLog(
        log_date=log_date or date.today(),
        pre_workout_kcal=pre_kcal,
        post_workout_kcal=post_kcal,
    )
    try:
        await CaloriesRepository().upsert(get_user_id(ctx), entry)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(f"{entry.total_kcal:,.0f} kcal logged for {entry.log_date}")


@log.command("set")
@click.argument("exercise")
@click.option("-r", "--reps", type=int, required=True, help="Repetitions")
@click.option("-w", "--weight", type=float, required=True, help="Weight lifted")
@click.option("-u", "--unit", type=UNIT_CHOICE, default="lb", show_default=True)
@click.option("-n", "--set-number", type=int, default=1, show_default=True)
@click.option("-m", "--muscle-group", help="Muscle group (used when creating the exercise)")
@click.option("-s", "--split", default="", help="Split name, e.g. push or legs")
@click.option("-d", "--date", "session_date", callback=parse_date, help="Day (YYYY-MM-DD), default today")
@click.pass_context
@async_command
async def log_set(
    ctx: click.Context,
    exercise: str,
    reps: int,
    weight: float,
    unit: str,
    set_number: int,
    muscle_group: str | None,
    split: str,
    session_date: date | None,
):
    """Record one weighted set of EXERCISE."""
    ensure_initialized(ctx)
    user_id = get_user_id(ctx)
    session_date = session_date or date.today()

    try:
        exercise_id = await ExerciseRepository().get_or_create(
            user_id, exercise, muscle_group=muscle_group, split=split or None
        )
        workout_repo = WorkoutRepository()
        session_id = await workout_repo.get_or_create_session(user_id, session_date, split)
        await workout_repo.upsert_set(
            user_id,
            WorkoutSet(
                session_id=session_id,
                exercise_id=exercise_id,
                set_number=set_number,
                reps=reps,
                weight_input=weight,
                unit_input=WeightUnit(unit),
            ),
        )
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success(
        f"{exercise} set {set_number}: {reps}×{format_number(weight)} {unit} on {session_date}"
    )
    if reps == 0 or weight == 0:
        echo_warning("Sets with zero reps or zero weight do not count toward strength scores.")


@log.command("list")
@click.argument("kind", type=click.Choice(["bodyweight", "calories", "sets"]))
@click.option("-l", "--limit", type=int, default=14, show_default=True, help="Most recent entries to show")
@click.option("-u", "--unit", type=UNIT_CHOICE, default="kg", show_default=True, help="Unit to show weights in")
@click.pass_context
@async_command
async def list_logs(ctx: click.Context, kind: str, limit: int, unit: str):
    """Show recent bodyweight, calorie or set entries."""
    ensure_initialized(ctx)
    user_id = get_user_id(ctx)

    if kind == "bodyweight":
        entries = await BodyweightRepository().list_for_user(user_id)
        headers = ["ID", "Date", "Entered", unit]
        rows = [
            [
                str(e.id),
                e.log_date.isoformat(),
                f"{format_number(e.weight_input)} {e.unit_input.value}",
                format_number(from_kg(e.weight_kg, unit)) if e.weight_kg is not None else "-",
            ]
            for e in entries[-limit:]
        ]
    elif kind == "calories":
        entries = await CaloriesRepository().list_for_user(user_id)
        headers = ["ID", "Date", "Pre", "Post", "Total"]
        rows = [
            [
                str(e.id),
                e.log_date.isoformat(),
                format_number(e.pre_workout_kcal) if e.pre_workout_kcal is not None else "-",
                format_number(e.post_workout_kcal) if e.post_workout_kcal is not None else "-",
                format_number(e.total_kcal) if e.total_kcal is not None else "-",
            ]
            for e in entries[-limit:]
        ]
    else:
        entries = await WorkoutRepository().list_set_logs(user_id)
        headers = ["Date", "Exercise", "Set", "Reps", f"Weight ({unit})"]
        rows = [
            [
                e.session_date.isoformat(),
                e.exercise_name[:30],
                str(e.set_number),
                str(e.reps),
                format_number(from_kg(e.weight, unit)),
            ]
            for e in entries[-limit:]
        ]

    if not rows:
        echo_info(f"No {kind} entries yet.")
        return

    click.echo()
    click.echo(format_table(headers=headers, rows=rows))
