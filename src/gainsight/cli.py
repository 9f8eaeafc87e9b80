"""CLI entry point for gainsight."""

import logging

import click

from . import __version__, config
from .commands import dashboard, init, insights, log, serve


@click.group()
@click.version_option(version=__version__, prog_name="gainsight")
@click.option("--user", "user_id", default=config.DEFAULT_USER_ID, show_default=True, help="User to act for")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, user_id: str, verbose: bool):
    """gainsight: workout, bodyweight and calorie insights.

    Log your training, bodyweight and calories, then see how they move
    together.

    Example usage:

        # Initialize the database
        gainsight init

        # Log a few things
        gainsight log set "Bench Press" --reps 5 --weight 135 --set-number 1
        gainsight log bodyweight 180
        gainsight log calories --pre 800 --post 1200

        # See the insights
        gainsight insights show

        # Counts, latest entries and the last session per split
        gainsight dashboard
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["user_id"] = user_id


# Register commands
main.add_command(init)
main.add_command(log)
main.add_command(insights)
main.add_command(dashboard)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
