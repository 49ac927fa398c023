"""Terminal summary of a coverage report with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from bindcov.reporters.summary import CoverageSummary

console = Console()

_GOOD_COVERAGE = 80.0
_FAIR_COVERAGE = 50.0


def _coverage_color(percentage: float) -> str:
    """Return a Rich color name for a coverage percentage."""
    if percentage >= _GOOD_COVERAGE:
        return "green"
    if percentage >= _FAIR_COVERAGE:
        return "yellow"
    return "red"


class SummaryReporter:
    """Print method coverage per package as a table."""

    def __init__(self) -> None:
        self.console = console

    def print_summary(self, summary: CoverageSummary) -> None:
        """Print a coverage summary table."""
        if not summary.packages:
            self.console.print("[dim]No declarations reported[/dim]")
            return

        title = f"Binding Coverage: {summary.name}" if summary.name else "Binding Coverage"
        table = Table(title=title, title_style="bold cyan")
        table.add_column("Package", style="bold")
        table.add_column("Classes", justify="right")
        table.add_column("Methods", justify="right")
        table.add_column("Coverage", justify="right")

        for name, package in summary.packages.items():
            pct = package.method_coverage_percentage
            color = _coverage_color(pct)
            table.add_row(
                name,
                str(package.class_count),
                f"{package.method_covered}/{package.method_covered + package.method_missed}",
                f"[{color}]{pct:.1f}%[/{color}]",
            )

        overall = summary.method_coverage_percentage
        color = _coverage_color(overall)
        table.add_section()
        table.add_row(
            "[bold]Overall[/bold]",
            str(sum(p.class_count for p in summary.packages.values())),
            f"{summary.method_covered}/{summary.method_covered + summary.method_missed}",
            f"[bold {color}]{overall:.1f}%[/bold {color}]",
        )

        self.console.print(table)
