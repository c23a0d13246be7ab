"""Render check results with Rich.

Diagnostics go to the stderr console; anything a script may want to capture
(resolved paths, sizes, summaries) goes to stdout.
"""

import logging

from rich.table import Table

from ..console import console
from ..console import err_console
from ..dispatch import ScriptReport
from ..models import CheckResult
from ..models import FailureKind
from ..utils.error_format import escape_markup

logger = logging.getLogger(__name__)

_FAILURE_STYLES = {
    FailureKind.USAGE: "yellow",
    FailureKind.NOT_FOUND: "red",
    FailureKind.OUT_OF_RANGE: "red",
    FailureKind.EMPTY: "red",
}


def report_result(result: CheckResult) -> int:
    """Print the diagnostic of a failed result to stderr.

    Returns:
        Exit status for the result (0 passed, 1 failed)
    """
    if result.ok:
        return 0

    style = _FAILURE_STYLES.get(result.failure, "red")
    err_console.print(f"[{style}]{escape_markup(result.reason)}[/{style}]", highlight=False)
    return 1


def print_preflight_report(report: ScriptReport, source: str) -> None:
    """Print a table of executed preflight lines to stdout."""
    table = Table(title=f"Preflight: {escape_markup(source)}")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Check", style="cyan")
    table.add_column("Result")

    for step in report.steps:
        if step.result.ok:
            outcome = "[green]✓ ok[/green]"
        else:
            outcome = f"[red]✗ {escape_markup(step.result.reason)}[/red]"
        table.add_row(str(step.line_no), escape_markup(step.line), outcome)

    console.print(table)
    passed = sum(1 for step in report.steps if step.result.ok)
    console.print(f"[bold]Total:[/bold] {passed}/{len(report.steps)} checks passed")
