"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.table import Table
from rich.text import Text


if TYPE_CHECKING:
    from datetime import datetime

    from postboard.core.exceptions import PostboardError
    from postboard.core.models import RecordCollection


logger = logging.getLogger("postboard.cli")


def _format_timestamp(value: datetime | None) -> str:
    """Format a record timestamp in local time, or '-' when unknown."""
    if value is None:
        return "-"
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def records_table(records: RecordCollection, title: str | None = None) -> Table:
    """Build a Rich table listing records in board order.

    Args:
        records: The board to display.
        title: Optional table title.

    Returns:
        Table with ID, Message and Created columns.
    """
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Message", overflow="fold")
    table.add_column("Created", style="dim")

    for record in records:
        table.add_row(
            str(record.id),
            Text(record.body),
            _format_timestamp(record.created_at),
        )
    return table


def exit_with_error(error: PostboardError) -> NoReturn:
    """Report a library error on stderr and exit with status 1.

    Prints ``Error: ...`` and, when available, ``Hint: ...``. The traceback
    is logged at debug level.
    """
    logger.debug("command failed", exc_info=error)
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1) from None
