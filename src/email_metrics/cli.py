"""Typer CLI for email-metrics.

Commands:
  report  Print elapsed-time statistics per operation from a CLEF log
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path  # noqa: TC003 (Typer evaluates type hints at runtime)
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from email_metrics.aggregator import aggregate_all
from email_metrics.clef import read_log_file
from email_metrics.config import ReportSettings
from email_metrics.extractor import extract
from email_metrics.models import Operation
from email_metrics.report import format_summary

app = typer.Typer(
    name="email-metrics",
    help="Elapsed-time statistics for email pipeline operations",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


@app.callback()
def main(ctx: typer.Context) -> None:
    """Email metrics report CLI."""
    settings = ReportSettings()
    logging.basicConfig(level=settings.log_level.upper())
    ctx.obj = settings


@app.command()
def report(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="CLEF log file (overrides EMAIL_METRICS_LOG_FILE)"),
    ] = None,
    operation: Annotated[
        list[Operation] | None,
        typer.Option("--operation", "-o", help="Operation to report (repeatable)"),
    ] = None,
    format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TEXT,
) -> None:
    """Print one summary line per operation that has data."""
    settings: ReportSettings = ctx.obj or ReportSettings()
    path = log_file or settings.log_file
    operations = operation or settings.operations

    try:
        events = read_log_file(path)
    except OSError as e:
        err_console.print(f"[red]Cannot read log file {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    records = extract(events)
    results = aggregate_all(records, operations)

    if format == OutputFormat.JSON:
        console.print_json(
            data={
                op: {**result.model_dump(mode="json"), "summary": format_summary(op, result)}
                for op, result in results.items()
            }
        )
        return

    for op, result in results.items():
        console.print(format_summary(op, result), markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
