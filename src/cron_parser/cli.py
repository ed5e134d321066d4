"""Command-line interface for cron_parser."""

import json
import logging
from datetime import datetime
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cron_parser.config import CronConfig
from cron_parser.cron import Cron
from cron_parser.errors import CronError
from cron_parser.fields import FIELD_ORDER
from cron_parser.grammar import validate_expression
from cron_parser.schedule import Schedule

app = typer.Typer(
    name="cron-parser",
    help="Compute the next run times of a cron expression",
    add_completion=False,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_start(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Not an ISO 8601 datetime: {value}", param_hint="--start")


@app.command(name="next")
def next_cmd(
    expression: Annotated[str, typer.Argument(help="Five-field cron expression")],
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of occurrences to show"),
    ] = 5,
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="Reference time in ISO 8601 (default: now)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (console, json)"),
    ] = "console",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Show the next occurrences of a cron expression."""
    _configure_logging(verbose)
    start_time = _parse_start(start)

    try:
        iterator = Cron(CronConfig.from_env()).parse(expression, start_time)
        occurrences = [iterator.next() for _ in range(count)]
    except (CronError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if format == "json":
        typer.echo(json.dumps([o.isoformat() for o in occurrences], indent=2))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Occurrence", style="cyan")
    table.add_column("Weekday")
    for i, occurrence in enumerate(occurrences, 1):
        table.add_row(str(i), occurrence.strftime("%Y-%m-%d %H:%M"), occurrence.strftime("%A"))
    console.print(table)


@app.command(name="validate")
def validate_cmd(
    expression: Annotated[str, typer.Argument(help="Five-field cron expression")],
) -> None:
    """Check a cron expression against the grammar."""
    errors = validate_expression(expression)
    if errors:
        for error in errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)
    typer.echo("OK")


@app.command(name="explain")
def explain_cmd(
    expression: Annotated[str, typer.Argument(help="Five-field cron expression")],
) -> None:
    """Show the normalized values of each field."""
    try:
        schedule = Schedule.parse(expression)
    except CronError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Values")
    for field_type in FIELD_ORDER:
        values = schedule.field_values(field_type)
        table.add_row(
            field_type.label,
            "*" if values is None else ",".join(str(v) for v in values),
        )
    console.print(table)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
