"""Dashboard command."""

import json
from datetime import date

import click

from ..models.logs import WeightUnit
from ..services.dashboard import DashboardService
from ..utils.units import format_number, from_kg, to_kg
from .base import (
    async_command,
    echo_error,
    echo_info,
    ensure_initialized,
    format_table,
    get_user_id,
    parse_date,
)


def _days_ago(days: int) -> str:
    if days == 0:
        return "today"
    if days == 1:
        return "yesterday"
    return f"{days} days ago"


@click.command()
@click.option("-s", "--split", help="Also list recent sessions of this split")
@click.option(
    "-u",
    "--unit",
    type=click.Choice([u.value for u in WeightUnit]),
    default="lb",
    show_default=True,
    help="Unit to show bodyweight in",
)
@click.option("--as-of", "as_of", callback=parse_date, help="Reference day (YYYY-MM-DD), default today")
@click.option("--json", "as_json", is_flag=True, help="Print the raw payload as JSON")
@click.pass_context
@async_command
async def dashboard(
    ctx: click.Context, split: str | None, unit: str, as_of: date | None, as_json: bool
):
    """Show log counts, latest entries and the last session of each split."""
    ensure_initialized(ctx)

    result = await DashboardService().load(get_user_id(ctx), split=split, as_of=as_of)
    if not result.ok:
        echo_error(result.message or "Failed to load dashboard.")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    summary = result.summary

    click.echo()
    click.echo(click.style("Dashboard", bold=True))
    click.echo("=" * 50)
    click.echo(f"  Workout sessions:   {summary.workout_count}")
    click.echo(f"  Bodyweight entries: {summary.bodyweight_count}")

    if summary.latest_workout:
        workout = summary.latest_workout
        label = f" ({workout.split})" if workout.split else ""
        click.echo(f"  Latest workout:     {workout.session_date.isoformat()}{label}")

    if summary.latest_bodyweight:
        entry = summary.latest_bodyweight
        weight_kg = entry.weight_kg
        if weight_kg is None:
            weight_kg = to_kg(entry.weight_input, entry.unit_input)
        click.echo(
            f"  Latest bodyweight:  {format_number(from_kg(weight_kg, unit))} {unit}"
            f" on {entry.log_date.isoformat()}"
        )

    if summary.last_session_by_split:
        click.echo()
        click.echo(
            format_table(
                headers=["Split", "Previous", "When"],
                rows=[
                    [s.split or "-", s.session_date.isoformat(), _days_ago(s.days_ago)]
                    for s in summary.last_session_by_split
                ],
            )
        )

    if split is not None:
        click.echo()
        click.echo(click.style(f"Recent {split} sessions", bold=True))
        if summary.recent_sessions:
            for session in summary.recent_sessions:
                click.echo(f"  {session.session_date.isoformat()}")
        else:
            echo_info(f"No {split} sessions yet.")
