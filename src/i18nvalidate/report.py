"""Console rendering of batch validation reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from i18nvalidate.batch import BatchReport


def render_report(report: "BatchReport", console: Console | None = None) -> None:
    """Print a report to a Rich console."""
    console = console or Console()
    console.print()
    console.print(f"[bold]Validation Report[/bold] ({report.source}, locale: {report.locale})")
    console.print("━" * 52)

    if not report.has_errors:
        console.print(f"[green]✓ All {report.row_count:,} rows are valid[/green]")
        console.print()
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Row", justify="right")
    table.add_column("Field", style="cyan")
    table.add_column("Rule", style="yellow")
    table.add_column("Message", style="white")

    for entry in sorted(report.entries, key=lambda e: (e.row, e.namespace)):
        table.add_row(str(entry.row), entry.namespace, entry.rule, entry.message)

    console.print(table)
    console.print()
    console.print(
        f"Summary: {len(report.entries)} errors in "
        f"{len(report.failed_rows)} of {report.row_count:,} rows"
    )
    console.print()


def report_to_text(report: "BatchReport", width: int = 100) -> str:
    """Render a report to a string."""
    console = Console(force_terminal=False, width=width)
    with console.capture() as capture:
        render_report(report, console)
    return capture.get()
