"""Insights commands."""

import json
from datetime import date

import click

from .. import config
from ..models.insights import AggregationMode
from ..services.insights import InsightsService
from ..utils.units import format_number
from .base import (
    async_command,
    echo_error,
    echo_info,
    ensure_initialized,
    format_table,
    get_user_id,
    parse_date,
)

MODE_CHOICE = click.Choice([m.value for m in AggregationMode])


@click.group()
def insights():
    """View insights derived from your logs."""
    pass


@insights.command("show")
@click.option(
    "-m",
    "--mode",
    type=MODE_CHOICE,
    default=config.STRENGTH_AGGREGATION_MODE.value,
    show_default=True,
    help="How exercise scores on the same day are combined",
)
@click.option("--as-of", "as_of", callback=parse_date, help="Reference day (YYYY-MM-DD), default today")
@click.option("--json", "as_json", is_flag=True, help="Print the raw payload as JSON")
@click.pass_context
@async_command
async def show(ctx: click.Context, mode: str, as_of: date | None, as_json: bool):
    """Show facts, correlations, improvements, achievements and suggestions."""
    ensure_initialized(ctx)

    service = InsightsService(mode=AggregationMode(mode))
    result = await service.load(get_user_id(ctx), as_of=as_of)

    if not result.ok:
        echo_error(result.message or "Failed to load insights.")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    view = result.view

    click.echo()
    click.echo(click.style("Facts", bold=True))
    click.echo("=" * 50)
    if view.facts:
        click.echo(
            format_table(
                headers=["Metric", "Value", "Detail"],
                rows=[[f.label, f.value, f.detail] for f in view.facts],
            )
        )
    else:
        echo_info("Nothing logged yet.")

    click.echo()
    click.echo(click.style("Correlations", bold=True))
    click.echo("=" * 50)
    for c in view.correlations:
        value = f"{c.value:+.2f}" if c.value is not None else "n/a"
        click.echo(f"  {c.label}: {value} ({c.interpretation}, {c.overlap_days} days)")

    if view.improvements:
        click.echo()
        click.echo(click.style("Improvements", bold=True))
        for line in view.improvements:
            click.echo(click.style("  + ", fg="green") + line)

    if view.achievements:
        click.echo()
        click.echo(click.style("Achievements", bold=True))
        for a in view.achievements:
            click.echo(f"  {a.title} [{a.period}]")
            click.echo(f"    {a.detail}")

    if view.suggestions:
        click.echo()
        click.echo(click.style("Suggestions", bold=True))
        for line in view.suggestions:
            click.echo(click.style("  > ", fg="yellow") + line)


@insights.command("sessions")
@click.option("-e", "--exercise", help="Only show this exercise")
@click.option("-l", "--limit", type=int, default=20, show_default=True)
@click.pass_context
@async_command
async def sessions(ctx: click.Context, exercise: str | None, limit: int):
    """List per-exercise session strength scores (estimated 1RM, kg)."""
    ensure_initialized(ctx)

    result = await InsightsService().load(get_user_id(ctx))
    if not result.ok:
        echo_error(result.message or "Failed to load insights.")
        ctx.exit(1)

    scores = sorted(result.session_scores, key=lambda s: (s.date, s.exercise_name))
    if exercise:
        scores = [s for s in scores if s.exercise_name.lower() == exercise.lower()]

    if not scores:
        echo_info("No weighted sessions found.")
        return

    click.echo()
    click.echo(
        format_table(
            headers=["Date", "Exercise", "Score", "Sets"],
            rows=[
                [
                    s.date.isoformat(),
                    s.exercise_name[:30],
                    format_number(s.session_strength),
                    s.set_summary,
                ]
                for s in scores[-limit:]
            ],
        )
    )
