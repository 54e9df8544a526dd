"""Rich console interface for the CareFlow CLI."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from careflow.console.display import (
    print_batch_summary,
    print_candidate_patients,
    print_equity_breakdown,
    print_matches,
    print_plan,
    print_store_stats,
    print_workflow_run,
)


if TYPE_CHECKING:
    from careflow.core.models import (
        BatchMatchResult,
        ConfirmedMatch,
        EquityBreakdown,
        EquityTier,
        Patient,
        RankedMatch,
        RankedPatient,
        WorkflowRun,
    )


class CareFlowConsole:
    """Rich console output for matching runs and their results."""

    def __init__(self, verbose: bool = False) -> None:
        self.console = Console()
        self.verbose = verbose

    def setup_logging(self, level: str = "INFO") -> None:
        logging.basicConfig(
            level=level if self.verbose else "WARNING",
            format="%(message)s",
            handlers=[
                RichHandler(
                    console=self.console, rich_tracebacks=True, show_time=False, show_path=False
                )
            ],
            force=True,
        )

    def print_header(self, title: str, detail: str = "") -> None:
        header = Text()
        header.append("CareFlow Exchange", style="bold blue")
        header.append(" - Equity-Aware Matching\n\n", style="dim")
        header.append(title, style="bold")
        if detail:
            header.append(f"\n{detail}", style="dim")
        self.console.print(Panel(header, border_style="blue"))
        self.console.print()

    def print_equity_breakdown(
        self, patient: Patient, breakdown: EquityBreakdown, tier: EquityTier
    ) -> None:
        print_equity_breakdown(self.console, patient, breakdown, tier)

    def print_matches(self, patient: Patient, matches: list[RankedMatch]) -> None:
        print_matches(self.console, patient, matches)

    def print_candidate_patients(self, appointment_id: str, ranked: list[RankedPatient]) -> None:
        print_candidate_patients(self.console, appointment_id, ranked)

    def print_batch_summary(self, results: list[BatchMatchResult]) -> None:
        print_batch_summary(self.console, results)

    def print_confirmation(self, confirmed: ConfirmedMatch) -> None:
        s = confirmed.scores
        self.console.print(
            Panel(
                f"[green]✓ Match confirmed[/green]\n\n"
                f"[bold]Patient:[/bold] {confirmed.patient.name or confirmed.patient.id}\n"
                f"[bold]Slot:[/bold] {confirmed.appointment.id} at {confirmed.appointment.location}\n"
                f"[bold]Score:[/bold] {s.total_match_score} (tier {int(s.priority_tier)})\n\n"
                f"[dim]{s.reasoning_explanation}[/dim]",
                title=f"[green]{confirmed.match_id}[/green]",
                border_style="green",
            )
        )
        print_plan(self.console, confirmed.plan)

    def print_workflow_run(self, run: WorkflowRun) -> None:
        print_workflow_run(self.console, run)

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, error: str) -> None:
        self.console.print()
        self.console.print(
            Panel(f"[red]{error}[/red]", title="[red]Error[/red]", border_style="red")
        )

    def print_store_stats(self, stats: dict[str, Any]) -> None:
        print_store_stats(self.console, stats)
