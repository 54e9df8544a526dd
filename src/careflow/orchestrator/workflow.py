"""Post-match workflow: notifications, calendar update and room preparation.

Workflows run as explicit asyncio tasks. A failing action never stops the
actions after it; its error is recorded on the returned :class:`WorkflowRun`
so callers (and tests) can observe it.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from careflow.core.exceptions import NotificationDeliveryError, RecordNotFoundError
from careflow.core.models import (
    ActionResult,
    CalendarEvent,
    Notification,
    NotificationResult,
    RoomPreparation,
    WorkflowRun,
)
from careflow.core.types import (
    ActionStatus,
    NotificationChannel,
    PriorityTier,
    SlotStatus,
    WorkflowAction,
    WorkflowStatus,
)
from careflow.rendering import TemplateRenderer


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from careflow.core.models import Appointment, Doctor, MatchScore, Patient
    from careflow.notifications.sink import NotificationSink
    from careflow.storage.base import ProfileStore

logger = logging.getLogger(__name__)

EXPECTED_ARRIVAL = timedelta(minutes=10)
DEFAULT_VISIT_MINUTES = 60


@dataclass(frozen=True)
class WorkflowContext:
    """Everything the workflow actions need about one confirmed match."""

    match_id: str
    patient: Patient
    appointment: Appointment
    scores: MatchScore
    doctor: Doctor | None = None

    @property
    def priority(self) -> str:
        return "critical" if self.scores.priority_tier <= PriorityTier.EMERGENT else "standard"


class WorkflowDispatcher:
    """Runs post-match workflows and notification batches as asyncio tasks."""

    def __init__(
        self,
        store: ProfileStore,
        sink: NotificationSink,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.store = store
        self.sink = sink
        self.renderer = renderer or TemplateRenderer()
        self._tasks: set[asyncio.Task] = set()
        self._handlers: dict[WorkflowAction, Callable[[WorkflowContext, WorkflowRun], Awaitable[None]]] = {
            WorkflowAction.SEND_PATIENT_NOTIFICATION: self._send_patient_notification,
            WorkflowAction.SEND_DOCTOR_NOTIFICATION: self._send_doctor_notification,
            WorkflowAction.UPDATE_CALENDAR: self._update_calendar,
            WorkflowAction.PREPARE_ER_ROOM: self._prepare_room,
        }

    # Task management

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def submit(self, context: WorkflowContext) -> asyncio.Task[WorkflowRun]:
        """Start the workflow for a match without waiting for it.

        Must be called from inside a running event loop.
        """
        task = asyncio.get_running_loop().create_task(self.run(context), name=f"workflow:{context.match_id}")
        self._track(task)
        return task

    def dispatch(self, notifications: Iterable[Notification]) -> asyncio.Task[list[NotificationResult]]:
        """Deliver a batch of notifications concurrently in the background."""
        batch = list(notifications)
        task = asyncio.get_running_loop().create_task(self.deliver(batch), name="notifications")
        self._track(task)
        return task

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    async def drain(self) -> None:
        """Wait until every submitted task has finished."""
        while pending := [t for t in self._tasks if not t.done()]:
            await asyncio.gather(*pending, return_exceptions=True)

    # Execution

    async def deliver(self, notifications: list[Notification]) -> list[NotificationResult]:
        """Send every notification; sink exceptions become failed results."""
        outcomes = await asyncio.gather(*(self.sink.notify(n) for n in notifications), return_exceptions=True)
        results: list[NotificationResult] = []
        for message, outcome in zip(notifications, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                outcome = NotificationResult(
                    success=False, channel=message.channel, recipient=message.recipient, error=str(outcome)
                )
            if not outcome.success:
                logger.warning("Notification to %s failed: %s", outcome.recipient, outcome.error)
            results.append(outcome)
        return results

    async def run(self, context: WorkflowContext) -> WorkflowRun:
        """Execute every workflow action in order and return the outcome."""
        run = WorkflowRun(
            workflow_id=f"wf_{uuid.uuid4().hex[:12]}",
            match_id=context.match_id,
            priority=context.priority,
            status=WorkflowStatus.IN_PROGRESS,
            actions=[ActionResult(action=action) for action in self._handlers],
        )
        logger.info("Workflow %s started for match %s", run.workflow_id, context.match_id)

        for result in run.actions:
            result.status = ActionStatus.IN_PROGRESS
            try:
                await self._handlers[result.action](context, run)
            except Exception as e:
                result.status = ActionStatus.FAILED
                result.error = str(e)
                logger.warning("Workflow %s action %s failed: %s", run.workflow_id, result.action.value, e)
                continue
            result.status = ActionStatus.COMPLETED
            result.completed_at = datetime.now()
            logger.debug("Workflow %s completed %s", run.workflow_id, result.action.value)

        run.status = WorkflowStatus.COMPLETED_WITH_ERRORS if run.failed_actions else WorkflowStatus.COMPLETED
        run.completed_at = datetime.now()
        logger.info("Workflow %s finished: %s", run.workflow_id, run.status.value)
        return run

    # Actions

    async def _notify(self, message: Notification) -> None:
        result = await self.sink.notify(message)
        if not result.success:
            raise NotificationDeliveryError(message.recipient, result.error)

    async def _send_patient_notification(self, context: WorkflowContext, _run: WorkflowRun) -> None:
        patient, appointment = context.patient, context.appointment
        await self._notify(Notification(
            channel=NotificationChannel.SMS,
            recipient=patient.phone or patient.id,
            text=self.renderer.patient_room_ready(patient, appointment),
            priority=context.priority,
            metadata={"type": "patient_room_assignment", "matchId": context.match_id,
                      "location": appointment.location},
        ))

    async def _send_doctor_notification(self, context: WorkflowContext, _run: WorkflowRun) -> None:
        doctor, patient, appointment = context.doctor, context.patient, context.appointment
        recipient = (doctor.phone or doctor.id) if doctor else (appointment.doctor_id or "attending")
        await self._notify(Notification(
            channel=NotificationChannel.PAGER,
            recipient=recipient,
            text=self.renderer.doctor_patient_arrival(doctor, patient, appointment),
            priority=context.priority,
            metadata={"type": "doctor_patient_arrival", "matchId": context.match_id,
                      "patientId": patient.id},
        ))

    async def _update_calendar(self, context: WorkflowContext, run: WorkflowRun) -> None:
        patient, appointment = context.patient, context.appointment
        updated = self.store.update_appointment_status(appointment.id, SlotStatus.CONFIRMED, patient.id)
        if updated is None:
            raise RecordNotFoundError("appointment", appointment.id)
        run.calendar_event = CalendarEvent(
            doctor_id=appointment.doctor_id,
            patient_id=patient.id,
            appointment_id=appointment.id,
            title=f"Visit: {patient.medical_condition or 'Consultation'}",
            start_time=datetime.now(),
            estimated_duration=appointment.estimated_wait_minutes or DEFAULT_VISIT_MINUTES,
            location=appointment.location,
        )

    async def _prepare_room(self, context: WorkflowContext, run: WorkflowRun) -> None:
        now = datetime.now()
        run.room_preparation = RoomPreparation(
            room=context.appointment.location,
            status="preparing",
            assigned_patient_id=context.patient.id,
            appointment_id=context.appointment.id,
            priority=context.scores.priority_tier,
            assigned_at=now,
            expected_arrival=now + EXPECTED_ARRIVAL,
        )
