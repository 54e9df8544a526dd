"""Matching pipeline: fetch, rank, confirm, plan and dispatch."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from careflow.config.settings import Settings
from careflow.core.exceptions import (
    CareFlowError,
    RecordNotFoundError,
    SlotUnavailableError,
    ValidationFailedError,
)
from careflow.core.models import BatchMatchResult, ConfirmedMatch, Notification
from careflow.core.types import NotificationChannel, PriorityTier, SlotStatus
from careflow.notifications.sink import LoggingNotificationSink
from careflow.orchestrator.workflow import WorkflowContext, WorkflowDispatcher
from careflow.planning.coordination import CoordinationPlanBuilder
from careflow.scoring.equity import EquityScorer
from careflow.scoring.matching import MatchRanker, validate_patient


if TYPE_CHECKING:
    from collections.abc import Iterable

    from careflow.core.models import (
        Appointment,
        CoordinationPlan,
        NotificationResult,
        Patient,
        RankedMatch,
        RankedPatient,
        WorkflowRun,
    )
    from careflow.notifications.sink import NotificationSink
    from careflow.scoring.distance import DistanceFunction
    from careflow.storage.base import ProfileStore

logger = logging.getLogger(__name__)


@dataclass
class Confirmation:
    """A confirmed match plus the background tasks it started."""

    match: ConfirmedMatch
    workflow: asyncio.Task[WorkflowRun]
    notifications: asyncio.Task[list[NotificationResult]]

    async def wait(self) -> WorkflowRun:
        """Wait for the care-team alerts and the workflow; return the run."""
        await self.notifications
        return await self.workflow


class MatchingPipeline:
    """Orchestrates matching against a profile store."""

    def __init__(
        self,
        store: ProfileStore,
        settings: Settings | None = None,
        sink: NotificationSink | None = None,
        dispatcher: WorkflowDispatcher | None = None,
        distance: DistanceFunction | None = None,
        validate: bool = True,
    ) -> None:
        if settings is None:
            settings = Settings()
        self.settings = settings
        self.store = store
        self.validate = validate

        equity = EquityScorer(settings.scoring.default_urgency)
        ranker_args = {"distance": distance} if distance is not None else {}
        self.ranker = MatchRanker(settings.scoring, settings.matching, equity=equity, **ranker_args)
        self.planner = CoordinationPlanBuilder(settings.planning, equity)
        self.dispatcher = dispatcher or WorkflowDispatcher(store, sink or LoggingNotificationSink())

    # Lookups

    def _patient(self, patient_id: str) -> Patient:
        patient = self.store.get_patient(patient_id)
        if patient is None:
            raise RecordNotFoundError("patient", patient_id)
        return patient

    def _appointment(self, appointment_id: str) -> Appointment:
        appointment = self.store.get_appointment(appointment_id)
        if appointment is None:
            raise RecordNotFoundError("appointment", appointment_id)
        return appointment

    # Matching

    def find_matches(self, patient_id: str, limit: int | None = None) -> list[RankedMatch]:
        """Rank the available slots for one patient."""
        patient = self._patient(patient_id)
        if self.validate and (errors := validate_patient(patient)):
            raise ValidationFailedError(patient.id, errors)
        candidates = self.store.list_appointments(status=SlotStatus.AVAILABLE)
        matches = self.ranker.rank(patient, candidates, limit)
        logger.info(
            "Found %d matches for %s among %d available slots", len(matches), patient_id, len(candidates)
        )
        return matches

    def find_patients_for_appointment(
        self, appointment_id: str, limit: int | None = None
    ) -> list[RankedPatient]:
        """Rank waiting patients for one slot."""
        appointment = self._appointment(appointment_id)
        ranked = self.ranker.rank_patients(appointment, self.store.list_patients(), limit)
        logger.info("Found %d candidate patients for %s", len(ranked), appointment_id)
        return ranked

    def batch_matches(
        self, patient_ids: Iterable[str] | None = None, per_patient: int | None = None
    ) -> list[BatchMatchResult]:
        """Match many patients; a failing patient is reported, not raised."""
        if patient_ids is None:
            patient_ids = [p.id for p in self.store.list_patients()]
        results = []
        for patient_id in patient_ids:
            try:
                matches = self.find_matches(patient_id, per_patient)
            except CareFlowError as e:
                logger.warning("Batch matching skipped %s: %s", patient_id, e)
                results.append(BatchMatchResult(patient_id=patient_id, error=str(e)))
                continue
            results.append(BatchMatchResult(patient_id=patient_id, matches=matches))
        return results

    # Confirmation

    def _care_team_notifications(
        self, plan: CoordinationPlan, patient: Patient, appointment: Appointment
    ) -> list[Notification]:
        channel = (
            NotificationChannel.PAGER
            if plan.priority_tier <= PriorityTier.EMERGENT
            else NotificationChannel.EHR_ALERT
        )
        renderer = self.dispatcher.renderer
        return [
            Notification(
                channel=channel,
                recipient=member.name,
                text=renderer.care_team_alert(member.role, patient, appointment, plan.priority),
                priority=plan.priority,
                metadata={"type": "care_team_alert", "matchId": plan.match_id, "role": member.role},
            )
            for member in plan.care_team_assignments
        ]

    async def confirm_match(self, patient_id: str, appointment_id: str) -> Confirmation:
        """Book a slot for a patient and start the post-match work.

        The slot moves to ``occupied`` immediately; the workflow later marks it
        ``confirmed``. Care-team alerts and the workflow run as background
        tasks on the dispatcher.

        Raises:
            RecordNotFoundError: Unknown patient or appointment id.
            SlotUnavailableError: The slot is no longer available.
        """
        patient = self._patient(patient_id)
        appointment = self._appointment(appointment_id)
        if appointment.status != SlotStatus.AVAILABLE:
            raise SlotUnavailableError(appointment.id, appointment.status.value)

        scores = self.ranker.score(patient, appointment)
        booked = self.store.update_appointment_status(appointment.id, SlotStatus.OCCUPIED, patient.id)
        if booked is None:
            raise RecordNotFoundError("appointment", appointment.id)
        doctor = self.store.get_doctor(booked.doctor_id) if booked.doctor_id else None

        match_id = f"{patient.id}_{booked.id}"
        plan = self.planner.build_for_match(scores, patient, booked, match_id=match_id)
        confirmed = ConfirmedMatch(
            match_id=match_id,
            patient=patient,
            appointment=booked,
            doctor=doctor,
            scores=scores,
            plan=plan,
        )
        logger.info(
            "Confirmed %s: score %d, tier %d", match_id, scores.total_match_score, scores.priority_tier
        )

        notifications = self.dispatcher.dispatch(self._care_team_notifications(plan, patient, booked))
        workflow = self.dispatcher.submit(WorkflowContext(
            match_id=match_id, patient=patient, appointment=booked, scores=scores, doctor=doctor
        ))
        return Confirmation(match=confirmed, workflow=workflow, notifications=notifications)
