"""Command-line interface for CareFlow Exchange."""

from __future__ import annotations

import argparse
import asyncio
import sys

from careflow.config.settings import Settings
from careflow.console.logger import CareFlowConsole
from careflow.core.exceptions import RecordNotFoundError
from careflow.demo import seed_store
from careflow.notifications.sink import LoggingNotificationSink
from careflow.orchestrator.pipeline import MatchingPipeline
from careflow.rendering import write_plan_report
from careflow.scoring.equity import EquityScorer
from careflow.storage.repository import SQLiteProfileStore


console = CareFlowConsole()


def _open(db_path: str | None) -> tuple[Settings, SQLiteProfileStore]:
    settings = Settings()
    console.setup_logging(settings.log_level)
    return settings, SQLiteProfileStore(db_path or settings.storage.db_path)


def seed_demo(db_path: str | None = None, days_ahead: int = 7) -> None:
    """Load the demo doctors, patients and slots."""
    _, store = _open(db_path)
    counts = seed_store(store, days_ahead=days_ahead)
    console.print_success(
        f"Seeded {counts['patients']} patients, {counts['doctors']} doctors, "
        f"{counts['appointments']} appointments into {store.db_path}"
    )


def show_equity(patient_id: str, db_path: str | None = None) -> None:
    """Show a patient's equity score breakdown."""
    settings, store = _open(db_path)
    patient = store.get_patient(patient_id)
    if patient is None:
        raise RecordNotFoundError("patient", patient_id)
    scorer = EquityScorer(settings.scoring.default_urgency)
    breakdown = scorer.breakdown(patient)
    console.print_equity_breakdown(patient, breakdown, scorer.tier(breakdown.total))


def find_matches(patient_id: str, limit: int | None = None, db_path: str | None = None) -> None:
    """Rank available appointments for a patient."""
    settings, store = _open(db_path)
    pipeline = MatchingPipeline(store, settings)
    matches = pipeline.find_matches(patient_id, limit)
    console.print_header(f"Patient: {patient_id}", f"{len(matches)} matches")
    console.print_matches(store.get_patient(patient_id), matches)


def find_patients(appointment_id: str, limit: int | None = None, db_path: str | None = None) -> None:
    """Rank waiting patients for an appointment."""
    settings, store = _open(db_path)
    ranked = MatchingPipeline(store, settings).find_patients_for_appointment(appointment_id, limit)
    console.print_candidate_patients(appointment_id, ranked)


def batch_match(per_patient: int | None = None, db_path: str | None = None) -> None:
    """Match every stored patient."""
    settings, store = _open(db_path)
    console.print_batch_summary(MatchingPipeline(store, settings).batch_matches(per_patient=per_patient))


async def confirm_match(
    patient_id: str, appointment_id: str, html_path: str | None = None, db_path: str | None = None
) -> None:
    """Book a slot, print its plan and run the post-match workflow."""
    settings, store = _open(db_path)
    pipeline = MatchingPipeline(store, settings, sink=LoggingNotificationSink())
    confirmation = await pipeline.confirm_match(patient_id, appointment_id)
    console.print_confirmation(confirmation.match)
    run = await confirmation.wait()
    await pipeline.dispatcher.drain()
    console.print_workflow_run(run)
    if html_path:
        confirmed = confirmation.match
        output = write_plan_report(
            confirmed.plan, html_path, scores=confirmed.scores, patient=confirmed.patient,
            renderer=pipeline.dispatcher.renderer,
        )
        console.print_success(f"Plan report written to {output}")


def show_stats(db_path: str | None = None) -> None:
    """Show profile store statistics."""
    _, store = _open(db_path)
    console.print_store_stats(store.get_stats())


def main() -> None:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="careflow", description="Equity-aware patient to appointment matching"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show log output")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    seed_cmd = subparsers.add_parser("seed", help="Load demo patients, doctors and appointments")
    seed_cmd.add_argument("--days", type=int, default=7, help="Days of slots to generate")
    seed_cmd.add_argument("--db", help="Profile database path")

    eq_cmd = subparsers.add_parser("equity", help="Show a patient's equity breakdown")
    eq_cmd.add_argument("patient_id", help="Patient ID")
    eq_cmd.add_argument("--db", help="Profile database path")

    match_cmd = subparsers.add_parser("match", help="Rank appointments for a patient")
    match_cmd.add_argument("patient_id", help="Patient ID")
    match_cmd.add_argument("--limit", "-n", type=int, help="Maximum matches")
    match_cmd.add_argument("--db", help="Profile database path")

    pat_cmd = subparsers.add_parser("patients", help="Rank waiting patients for an appointment")
    pat_cmd.add_argument("appointment_id", help="Appointment ID")
    pat_cmd.add_argument("--limit", "-n", type=int, help="Maximum patients")
    pat_cmd.add_argument("--db", help="Profile database path")

    batch_cmd = subparsers.add_parser("batch", help="Match every stored patient")
    batch_cmd.add_argument("--per-patient", type=int, help="Matches per patient")
    batch_cmd.add_argument("--db", help="Profile database path")

    conf_cmd = subparsers.add_parser("confirm", help="Confirm a match and run the workflow")
    conf_cmd.add_argument("patient_id", help="Patient ID")
    conf_cmd.add_argument("appointment_id", help="Appointment ID")
    conf_cmd.add_argument("--html", help="Write the coordination plan to this HTML file")
    conf_cmd.add_argument("--db", help="Profile database path")

    stats_cmd = subparsers.add_parser("stats", help="Show profile store statistics")
    stats_cmd.add_argument("--db", help="Profile database path")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)
    console.verbose = args.verbose

    try:
        if args.command == "seed":
            seed_demo(args.db, args.days)
        elif args.command == "equity":
            show_equity(args.patient_id, args.db)
        elif args.command == "match":
            find_matches(args.patient_id, args.limit, args.db)
        elif args.command == "patients":
            find_patients(args.appointment_id, args.limit, args.db)
        elif args.command == "batch":
            batch_match(args.per_patient, args.db)
        elif args.command == "confirm":
            asyncio.run(confirm_match(args.patient_id, args.appointment_id, args.html, args.db))
        elif args.command == "stats":
            show_stats(args.db)
    except KeyboardInterrupt:
        console.console.print("\n[yellow]Cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
