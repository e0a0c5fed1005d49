"""Unit tests for CLI formatting helpers."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
import typer
from rich.console import Console

from postboard.cli.formatting import exit_with_error, records_table
from postboard.core.exceptions import InvalidInputError, PostboardError
from postboard.core.models import Record


def render(table) -> str:
    console = Console(width=120, record=True)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


@pytest.mark.cli
@pytest.mark.tra("CLI.Format.RecordsTable")
@pytest.mark.tier(0)
def test_records_table_lists_rows_in_order() -> None:
    records = (
        Record(id=1, body="first", created_at=datetime(2024, 1, 1, tzinfo=UTC)),
        Record(id=2, body="second"),
    )

    output = render(records_table(records, title="Board"))

    assert "Board" in output
    assert output.index("first") < output.index("second")
    assert "2024-01-01" in output or "2023-12-31" in output


@pytest.mark.cli
@pytest.mark.tra("CLI.Format.RecordsTable")
@pytest.mark.tier(0)
def test_records_table_does_not_interpret_markup() -> None:
    """Message text like [bold] is shown literally."""
    output = render(records_table((Record(id=1, body="[bold]hi[/bold]"),)))

    assert "[bold]hi[/bold]" in output


@pytest.mark.cli
@pytest.mark.tra("CLI.Format.RecordsTable")
@pytest.mark.tier(0)
def test_missing_timestamp_shows_dash() -> None:
    output = render(records_table((Record(id=1, body="x"),)))

    assert " - " in output


@pytest.mark.cli
@pytest.mark.tra("CLI.Format.ExitWithError")
@pytest.mark.tier(0)
def test_exit_with_error_prints_hint(capsys) -> None:
    with pytest.raises(typer.Exit) as exc_info:
        exit_with_error(InvalidInputError("Message body cannot be empty", body=""))

    assert exc_info.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Error: Message body cannot be empty" in err
    assert "Hint: Provide a message" in err


@pytest.mark.cli
@pytest.mark.tra("CLI.Format.ExitWithError")
@pytest.mark.tier(0)
def test_exit_with_error_without_hint(capsys) -> None:
    with pytest.raises(typer.Exit):
        exit_with_error(PostboardError("plain failure"))

    err = capsys.readouterr().err
    assert "Error: plain failure" in err
    assert "Hint" not in err
