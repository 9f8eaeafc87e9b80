"""Initialize project command."""

import click

from .. import config
from ..db import get_db_path, init_db
from .base import async_command, echo_info, echo_success


@click.command()
@async_command
async def init():
    """Initialize the gainsight data directory and database."""
    data_dir = config.DATA_DIR
    db_path = get_db_path(data_dir)

    echo_info(f"Initializing gainsight in {data_dir}")

    await init_db(db_path)
    echo_success("Database initialized")

    click.echo()
    click.echo("Next steps:")
    click.echo("  gainsight log set 'Bench Press' --reps 5 --weight 135")
    click.echo("  gainsight log bodyweight 180")
    click.echo("  gainsight log calories --pre 900 --post 1400")
    click.echo("  gainsight insights show")
