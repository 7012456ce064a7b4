"""
Report generation for benchmark results.
Console output through rich, plus JSON export.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .metrics import AggregateStats, RunOutcome
from .utils import get_machine_info


class Reporter:
    """
    Render benchmark progress and results.

    Supports:
        - Per-run and summary lines on the console
        - Section banners
        - Summary table for a suite
        - JSON data export

    Example:
        reporter = Reporter()
        reporter.print_summary_table(result)
        reporter.generate_json(result, output_dir=Path("results"))
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize reporter.

        Args:
            console: Console to write to (default: a new rich Console)
        """
        self.console = console or Console(highlight=False)

    def print_banner(self, title: str, width: int = 60) -> None:
        """Print a title framed by '=' rules."""
        self.console.print(f"\n{'=' * width}")
        self.console.print(escape(title))
        self.console.print("=" * width)

    def print_title(self, title: str) -> None:
        """Print a title underlined with '='."""
        self.console.print(f"[bold]{escape(title)}[/bold]")
        self.console.print("=" * len(title))

    def print_section(self, title: str) -> None:
        self.console.print(f"\n[bold]=== {escape(title)} ===[/bold]")

    def print_run(self, outcome: RunOutcome, describe: Callable[[Any], str]) -> None:
        """Print one line for a run."""
        if outcome.success and outcome.result is not None:
            result = outcome.result
            annotation = describe(result.return_value)
            line = f"Run {outcome.run_index}: {result.duration_ms:.3f}ms"
            if annotation:
                line += f" - {annotation}"
            self.console.print(escape(line))
        else:
            self.console.print(
                f"[red]Run {outcome.run_index}: Error - {escape(outcome.error or 'unknown')}[/red]"
            )

    def print_stats(self, stats: AggregateStats) -> None:
        """Print average, min and max, in that order."""
        if not stats.has_data:
            self.console.print(
                f"[yellow]No successful runs ({stats.successful_runs}/{stats.attempted_runs})[/yellow]"
            )
            return

        self.console.print(f"Average: {stats.average:.3f}ms")
        self.console.print(f"Min: {stats.min:.3f}ms")
        self.console.print(f"Max: {stats.max:.3f}ms")
        if stats.failed_runs:
            self.console.print(
                f"[yellow]Failed runs: {stats.failed_runs}/{stats.attempted_runs}[/yellow]"
            )

    def print_summary_table(self, result) -> None:
        """Print all aggregates of a suite as a table."""
        table = Table(title=f"{result.suite} ({result.runtime})")
        table.add_column("Workload", style="cyan")
        table.add_column("Runs", justify="right")
        table.add_column("Average", justify="right")
        table.add_column("Min", justify="right")
        table.add_column("Max", justify="right")

        for stats in result.stats:
            runs = f"{stats.successful_runs}/{stats.attempted_runs}"
            if stats.has_data:
                table.add_row(
                    escape(stats.label),
                    runs,
                    f"{stats.average:.3f}ms",
                    f"{stats.min:.3f}ms",
                    f"{stats.max:.3f}ms",
                )
            else:
                table.add_row(escape(stats.label), runs, "-", "-", "-")

        self.console.print(table)

    def generate_json(
        self,
        result,
        output_dir: Path,
        filename: Optional[str] = None,
    ) -> str:
        """
        Generate JSON benchmark results.

        Args:
            result: SuiteResult to export
            output_dir: Directory for the file (created if missing)
            filename: Output filename (optional)

        Returns:
            Path to generated file
        """
        file_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if not filename:
            filename = f"benchmark_{result.suite}_{result.runtime}_{file_timestamp}.json"

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / filename

        data = {
            "generated_at": datetime.now().isoformat(),
            "test_environment": get_machine_info(),
            **result.to_dict(),
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=str)

        return str(output_path)
