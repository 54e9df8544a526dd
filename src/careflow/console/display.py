"""Display components for console output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from careflow.core.types import ActionStatus, RiskLevel


if TYPE_CHECKING:
    from rich.console import Console

    from careflow.core.models import (
        BatchMatchResult,
        CoordinationPlan,
        EquityBreakdown,
        EquityTier,
        Patient,
        RankedMatch,
        RankedPatient,
        WorkflowRun,
    )

RISK_COLORS = {RiskLevel.HIGH: "red", RiskLevel.MEDIUM: "yellow", RiskLevel.LOW: "green"}


def _score_color(score: float) -> str:
    return "green" if score >= 80 else "yellow" if score >= 60 else "red"


def print_equity_breakdown(
    console: Console, patient: Patient, breakdown: EquityBreakdown, tier: EquityTier
) -> None:
    """Print a patient's equity score and the factors behind it."""
    table = Table(title=f"Equity Breakdown - {patient.name or patient.id}", border_style="blue")
    table.add_column("Factor", style="bold")
    table.add_column("Points", justify="right")
    table.add_column("Detail", style="dim")
    for factor in breakdown.factors:
        table.add_row(factor.label, str(factor.score), factor.description)
    table.add_row("[bold]Total[/bold]", f"[bold]{breakdown.total}[/bold]", "")
    console.print(table)
    console.print(f"  [{tier.color}]{tier.tier}[/{tier.color}] [dim]{tier.description}[/dim]")


def print_matches(console: Console, patient: Patient, matches: list[RankedMatch]) -> None:
    """Print ranked appointment matches."""
    if not matches:
        console.print(f"  [yellow]⚠[/yellow] No available matches for {patient.id}")
        return
    table = Table(title=f"Matches for {patient.name or patient.id}", border_style="blue")
    table.add_column("#", style="dim", width=3)
    table.add_column("Slot", style="dim")
    table.add_column("Doctor")
    table.add_column("Clinic")
    table.add_column("When")
    table.add_column("Tier", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Quality")
    for rank, match in enumerate(matches, start=1):
        a, s = match.appointment, match.scores
        color = _score_color(s.total_match_score)
        table.add_row(
            str(rank),
            a.id,
            a.doctor_name or a.doctor_id or "-",
            a.clinic_name or "-",
            " ".join(part for part in (a.date, a.time) if part) or "-",
            str(int(s.priority_tier)),
            f"[{color}]{s.total_match_score}[/{color}]",
            f"[{match.quality.color}]{match.quality.rating}[/{match.quality.color}]",
        )
    console.print(table)
    console.print(f"[dim]{matches[0].scores.reasoning_explanation}[/dim]")


def print_candidate_patients(console: Console, appointment_id: str, ranked: list[RankedPatient]) -> None:
    """Print waiting patients ranked for one slot."""
    if not ranked:
        console.print(f"  [yellow]⚠[/yellow] No waiting patients for {appointment_id}")
        return
    table = Table(title=f"Patients for {appointment_id}", border_style="blue")
    table.add_column("Patient", style="dim")
    table.add_column("Name")
    table.add_column("Condition", width=30)
    table.add_column("Tier", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Equity", justify="right")
    for entry in ranked:
        p, s = entry.patient, entry.scores
        table.add_row(
            p.id, p.name or "-", p.medical_condition or "-",
            str(int(s.priority_tier)), str(s.total_match_score), str(s.equity_score),
        )
    console.print(table)


def print_batch_summary(console: Console, results: list[BatchMatchResult]) -> None:
    """Print one line per patient of a batch run."""
    table = Table(title="Batch Matching", border_style="blue")
    table.add_column("Patient", style="dim")
    table.add_column("Matches", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Note")
    for result in results:
        best = str(result.matches[0].scores.total_match_score) if result.matches else "-"
        note = f"[red]{result.error}[/red]" if result.error else ""
        table.add_row(result.patient_id, str(result.match_count), best, note)
    console.print(table)


def print_plan(console: Console, plan: CoordinationPlan) -> None:
    """Print a coordination plan as a tree."""
    tree = Tree(f"[bold]Coordination Plan[/bold] {plan.match_id} [dim]({plan.priority})[/dim]")
    team = tree.add("[cyan]Care Team[/cyan]")
    for member in plan.care_team_assignments:
        team.add(f"{member.role}: {member.name} [dim]{member.action}, {member.eta}[/dim]")
    resources = tree.add("[cyan]Resources[/cyan]")
    for resource in plan.resource_allocation:
        resources.add(f"{resource.resource} [dim]{resource.status} ({resource.room})[/dim]")
    bottlenecks = tree.add("[cyan]Bottlenecks[/cyan]")
    for b in plan.potential_bottlenecks:
        color = RISK_COLORS[b.risk]
        bottlenecks.add(f"[{color}]{b.risk.value}[/{color}] {b.type} [dim]{b.mitigation}[/dim]")
    suggestions = tree.add("[cyan]Optimizations[/cyan]")
    for o in plan.optimization_suggestions:
        suggestions.add(f"{o.category}: {o.suggestion} [dim]{o.impact}[/dim]")
    console.print(tree)


def print_workflow_run(console: Console, run: WorkflowRun) -> None:
    """Print the outcome of each workflow action."""
    lines = []
    for action in run.actions:
        if action.status == ActionStatus.COMPLETED:
            lines.append(f"[green]✓[/green] {action.action.value}")
        else:
            lines.append(f"[red]✗[/red] {action.action.value} [dim]{action.error or action.status.value}[/dim]")
    border = "green" if not run.failed_actions else "yellow"
    console.print(Panel("\n".join(lines), title=f"Workflow {run.workflow_id}: {run.status.value}", border_style=border))


def print_store_stats(console: Console, stats: dict[str, Any]) -> None:
    """Print profile store statistics."""
    table = Table(title="Profile Store Statistics", border_style="blue")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Patients", str(stats["patients"]))
    if "doctors" in stats:
        table.add_row("Doctors", str(stats["doctors"]))
    table.add_row("Appointments", str(stats["appointments"]))
    for status, count in stats.get("by_status", {}).items():
        table.add_row(f"  {status.title()}", str(count))
    console.print()
    console.print(table)
    if stats.get("by_specialty"):
        specialty_table = Table(title="Appointments by Specialty", border_style="dim")
        specialty_table.add_column("Specialty")
        specialty_table.add_column("Slots", justify="right")
        for specialty, count in stats["by_specialty"].items():
            specialty_table.add_row(specialty.replace("_", " ").title(), str(count))
        console.print(specialty_table)
