"""List command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from postboard.cli.formatting import exit_with_error, records_table
from postboard.cli.main import DATABASE_OPTION, app, load_board_context, logger
from postboard.core.context import CallContext
from postboard.core.exceptions import PostboardError


@app.command(name="list")
def list_messages(
    database: str | None = DATABASE_OPTION,
    count: bool = typer.Option(
        False,
        "--count",
        help="Print only the number of messages.",
    ),
) -> None:
    """Show every message on the board, oldest first."""
    board, settings = load_board_context(database)

    try:
        records = board.fetch(CallContext.with_timeout(settings.store_timeout))
    except PostboardError as e:
        exit_with_error(e)

    logger.debug("fetched %d message(s); %s", len(records), board.stats())

    if count:
        typer.echo(str(len(records)))
        return

    if not records:
        typer.echo("No messages yet. Run 'postboard post' to add one.")
        return

    Console().print(records_table(records))
