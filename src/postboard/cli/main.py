"""CLI commands for postboard."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from postboard.cli.formatting import exit_with_error, records_table
from postboard.core.exceptions import PostboardError


if TYPE_CHECKING:
    from postboard.config import Settings
    from postboard.core.services import CachedCollectionStore


app = typer.Typer(
    name="postboard",
    help="Post short messages and read the board through a read-through cache.",
    no_args_is_help=True,
)

logger = logging.getLogger("postboard.cli")

DEFAULT_ENV_TEMPLATE = """\
# postboard settings. Every value can also be set as an environment variable.
# POSTBOARD_DATABASE=postboard.db
# POSTBOARD_CACHE_TTL=300
# POSTBOARD_CACHE_MAX_COST=1000000
# POSTBOARD_CACHE_CAPACITY_HINT=100
# POSTBOARD_CACHE_COST_MODE=fixed
# POSTBOARD_STORE_TIMEOUT=5
# POSTBOARD_BODY_MAX_LENGTH=256
# POSTBOARD_LOG_LEVEL=WARNING
"""

DATABASE_OPTION = typer.Option(
    None,
    "--database",
    "-d",
    help="SQLite file (relative to the project root) or ':memory:'.",
)


def load_board_context(
    database: str | None = None,
    workers: int | None = None,
) -> tuple[CachedCollectionStore, Settings]:
    """Load settings and open the board for a CLI command.

    Args:
        database: Optional override for the database setting.
        workers: When given, inject a WorkerPool of this size for batch posts.

    Returns:
        Tuple of (board, settings).

    Raises:
        typer.Exit: If the settings are invalid.
    """
    from postboard.adapters.executor import WorkerPool
    from postboard.config import load_settings
    from postboard.core.services import CachedCollectionStore
    from postboard.logging import LOGGER_NAME, configure_logging

    try:
        settings = load_settings(database=database)
    except PostboardError as e:
        exit_with_error(e)

    if not logging.getLogger(LOGGER_NAME).isEnabledFor(logging.DEBUG):
        configure_logging(settings.log_level)

    executor = WorkerPool(max_workers=workers) if workers and workers > 1 else None
    board = CachedCollectionStore.from_settings(settings, executor=executor)
    logger.debug(
        "opened board at %s (ttl=%ss, max_cost=%s)",
        settings.resolved_database(),
        settings.cache_ttl,
        settings.cache_max_cost,
    )
    return board, settings


@app.callback()
def _configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log cache and store activity to stderr.",
    ),
) -> None:
    """Configure logging before any command runs."""
    from postboard.logging import configure_logging

    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def init(
    directory: str | None = typer.Argument(
        None,
        help="Directory to initialize. Defaults to current directory.",
    ),
    database: str | None = DATABASE_OPTION,
) -> None:
    """Initialize a postboard project and its message database."""
    from postboard.adapters.store import SqliteRecordStore
    from postboard.config import load_settings

    target = Path(directory) if directory else Path.cwd()
    target = target.resolve()

    marker = target / ".postboard"
    if not marker.exists():
        marker.mkdir(parents=True)
        typer.echo(f"Created {marker.relative_to(target)}/")

    env_file = target / ".env"
    if not env_file.exists():
        env_file.write_text(DEFAULT_ENV_TEMPLATE)
        typer.echo(f"Created {env_file.relative_to(target)}")

    try:
        settings = load_settings(database=database)
    except PostboardError as e:
        exit_with_error(e)

    db_target = settings.resolved_database(root=target)
    if isinstance(db_target, str):
        typer.echo("Using in-memory store; nothing to initialize.")
        return

    if not db_target.exists():
        SqliteRecordStore(db_target).initialize()
        try:
            shown: Path = db_target.relative_to(target)
        except ValueError:
            shown = db_target
        typer.echo(f"Created {shown}")


@app.command()
def post(
    bodies: list[str] = typer.Argument(..., help="Message text(s) to post."),
    workers: int = typer.Option(
        1,
        "--workers",
        "-w",
        min=1,
        help="Post several messages concurrently with this many threads.",
    ),
    database: str | None = DATABASE_OPTION,
) -> None:
    """Post one or more messages and show the updated board."""
    from postboard.core.context import CallContext

    board, settings = load_board_context(database, workers=workers)
    ctx = CallContext.with_timeout(settings.store_timeout)

    try:
        if len(bodies) == 1:
            records = board.append(bodies[0], ctx=ctx)
        else:
            records = board.append_many(bodies, ctx=ctx, max_workers=workers)
    except PostboardError as e:
        exit_with_error(e)

    logger.debug("posted %d message(s); %s", len(bodies), board.stats())
    Console().print(records_table(records))


def main() -> None:
    """Entry point for the CLI."""
    app()
