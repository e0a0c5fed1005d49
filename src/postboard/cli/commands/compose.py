"""Interactive compose command for CLI."""

from __future__ import annotations

import time

import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from postboard.cli.formatting import exit_with_error
from postboard.cli.main import DATABASE_OPTION, app, load_board_context, logger
from postboard.core.context import CallContext
from postboard.core.exceptions import InvalidInputError, PostboardError


TITLE = Text(" postboard compose ", style="bold #ffffd7 on #5f5fd7")


@app.command()
def compose(
    delay: float = typer.Option(
        1.0,
        "--delay",
        min=0.0,
        help="Seconds to wait before sending each message (simulated latency).",
    ),
    database: str | None = DATABASE_OPTION,
) -> None:
    """Type messages interactively; each line is posted to the board."""
    board, settings = load_board_context(database)
    console = Console()

    console.print(TITLE)
    console.print("Enter a message to send it. Ctrl-D or Ctrl-C to quit.", style="dim")

    sent = 0
    while True:
        try:
            body = Prompt.ask("[bold magenta]>[/]", console=console)
        except (EOFError, KeyboardInterrupt):
            break

        if not body.strip():
            continue

        with console.status("Sending message...", spinner="dots"):
            if delay:
                time.sleep(delay)
            try:
                records = board.append(
                    body, ctx=CallContext.with_timeout(settings.store_timeout)
                )
            except InvalidInputError as e:
                console.print(f"[red]Not sent:[/] {e}")
                if e.recovery_hint:
                    console.print(f"Hint: {e.recovery_hint}", style="dim")
                continue
            except PostboardError as e:
                exit_with_error(e)

        sent += 1
        console.print(f"[green]Message sent![/] {len(records)} on the board.")

    logger.debug("compose session sent %d message(s); %s", sent, board.stats())
    console.print(f"Sent {sent} message(s).")
