"""Metrics Collector — measures how well the job market keeps units busy."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from hivemind.regulator.regulator import TickReport
from hivemind.world.base import World


@dataclass
class MetricsReport:
    """Container for all computed metrics."""
    ticks: int = 0
    scans: int = 0
    failed_scans: int = 0
    unit_turns: int = 0
    idle_turns: int = 0
    releases: int = 0
    unit_errors: int = 0
    assignments: dict[str, int] = field(default_factory=dict)
    controller_progress: int = 0
    construction_sites_left: int = 0

    @property
    def total_assignments(self) -> int:
        return sum(self.assignments.values())

    @property
    def busy_ratio(self) -> float:
        """Share of unit turns spent holding a job."""
        if self.unit_turns == 0:
            return 0.0
        return 1.0 - self.idle_turns / self.unit_turns


class MetricsCollector:
    """Accumulates per-tick regulator reports and renders a summary."""

    def __init__(self):
        self.report: Optional[MetricsReport] = None
        self._reports: list[TickReport] = []
        self._ticks: set[int] = set()

    def record(self, reports: list[TickReport]) -> None:
        for r in reports:
            self._reports.append(r)
            self._ticks.add(r.tick)

    def calculate(self, world: World) -> MetricsReport:
        """Compute all metrics from recorded reports and the final world state."""
        report = MetricsReport(ticks=len(self._ticks))
        assignments: Counter[str] = Counter()

        for r in self._reports:
            report.scans += int(r.scanned)
            report.failed_scans += int(r.scan_failed)
            report.unit_errors += len(r.errors)
            for turn in r.turns:
                report.unit_turns += 1
                report.idle_turns += int(turn.idle)
                report.releases += int(turn.released)
                if turn.assigned:
                    assignments[turn.job.kind.value] += 1

        report.assignments = dict(sorted(assignments.items()))

        for room in world.rooms():
            controller = world.controller(room)
            if controller is not None:
                report.controller_progress += controller.progress
            report.construction_sites_left += len(world.construction_sites(room))

        self.report = report
        return report

    def print_report(self, console: Console | None = None) -> None:
        """Print formatted metrics report."""
        console = console or Console()
        if self.report is None:
            console.print("No metrics calculated yet. Run calculate() first.")
            return

        r = self.report
        console.print(Panel(
            "[bold cyan]Hivemind — Simulation Report[/bold cyan]\n"
            f"Ticks: [bold yellow]{r.ticks}[/bold yellow]",
            border_style="cyan",
        ))

        summary = Table(title="Regulator Summary", border_style="blue")
        summary.add_column("Metric", style="bold")
        summary.add_column("Value", justify="right")
        summary.add_row("Scans", str(r.scans))
        summary.add_row("Failed Scans", f"[red]{r.failed_scans}[/red]")
        summary.add_row("Unit Turns", str(r.unit_turns))
        summary.add_row("Busy Ratio", f"{r.busy_ratio:.1%}")
        summary.add_row("Releases", str(r.releases))
        summary.add_row("Unit Errors", f"[{'red' if r.unit_errors else 'green'}]{r.unit_errors}[/]")
        summary.add_row("Controller Progress", f"[green]{r.controller_progress}[/green]")
        summary.add_row("Construction Sites Left", str(r.construction_sites_left))
        console.print(summary)

        if r.assignments:
            jobs = Table(title="Assignments by Job", border_style="magenta")
            jobs.add_column("Job", style="bold")
            jobs.add_column("Count", justify="right")
            total = r.total_assignments
            for kind, count in r.assignments.items():
                bar_len = int(count / total * 20)
                bar = "█" * bar_len + "░" * (20 - bar_len)
                jobs.add_row(kind, f"{bar} {count}")
            console.print(jobs)
