"""Tests for the matching pipeline and the post-match workflow."""

from __future__ import annotations

import asyncio

import pytest

from careflow.core.exceptions import RecordNotFoundError, SlotUnavailableError, ValidationFailedError
from careflow.core.models import Appointment, MatchScore, Notification, NotificationResult, Patient
from careflow.core.types import (
    ActionStatus,
    NotificationChannel,
    PriorityTier,
    SlotStatus,
    WorkflowAction,
    WorkflowStatus,
)
from careflow.notifications.sink import NotificationSink, OutboxNotificationSink
from careflow.orchestrator.pipeline import MatchingPipeline
from careflow.orchestrator.workflow import WorkflowContext, WorkflowDispatcher
from careflow.scoring.matching import MatchRanker
from careflow.storage.memory import InMemoryProfileStore


class ExplodingSink(NotificationSink):
    async def notify(self, message: Notification) -> NotificationResult:
        raise ConnectionError("gateway down")


@pytest.fixture
def pipeline(memory_store: InMemoryProfileStore, outbox: OutboxNotificationSink) -> MatchingPipeline:
    return MatchingPipeline(memory_store, sink=outbox)


class TestFindMatches:
    def test_ranks_available_slots(self, pipeline: MatchingPipeline) -> None:
        matches = pipeline.find_matches("PT-1029")
        # cardiology slots first (closer ZIP), then the primary care clinic
        assert [m.appointment_id for m in matches] == ["demo_appt_1", "demo_appt_11"]
        assert [m.scores.total_match_score for m in matches] == [60, 57]

    def test_insurance_filter(self, pipeline: MatchingPipeline) -> None:
        assert [m.appointment.doctor_id for m in pipeline.find_matches("PT-1103")] == ["doctor_2"]
        assert [m.appointment.doctor_id for m in pipeline.find_matches("PT-1087")] == ["doctor_3"]

    def test_skips_booked_slots(self, pipeline: MatchingPipeline, memory_store: InMemoryProfileStore) -> None:
        memory_store.update_appointment_status("demo_appt_1", SlotStatus.OCCUPIED, "someone")
        assert pipeline.find_matches("PT-1029")[0].appointment_id == "demo_appt_2"

    def test_unknown_patient(self, pipeline: MatchingPipeline) -> None:
        with pytest.raises(RecordNotFoundError, match="Patient not found: nobody"):
            pipeline.find_matches("nobody")

    def test_incomplete_patient(self, pipeline: MatchingPipeline, memory_store: InMemoryProfileStore) -> None:
        memory_store.save_patient(Patient(id="P-bare", specialty="cardiology"))
        with pytest.raises(ValidationFailedError) as exc_info:
            pipeline.find_matches("P-bare")
        assert exc_info.value.errors == ["Zip code is required", "Insurance information is required"]

    def test_validation_can_be_disabled(self, memory_store: InMemoryProfileStore) -> None:
        memory_store.save_patient(Patient(id="P-bare", specialty="cardiology"))
        assert MatchingPipeline(memory_store, validate=False).find_matches("P-bare")

    def test_reverse_matching(self, pipeline: MatchingPipeline) -> None:
        ranked = pipeline.find_patients_for_appointment("demo_appt_1")
        assert [r.patient.id for r in ranked] == ["PT-1150", "PT-1029"]
        assert ranked[0].scores.priority_tier == PriorityTier.CRITICAL_WITH_BARRIERS

    def test_batch_reports_errors(self, pipeline: MatchingPipeline) -> None:
        results = pipeline.batch_matches(["PT-1029", "nobody"], per_patient=1)
        assert results[0].match_count == 1
        assert results[0].error is None
        assert results[1].matches == []
        assert "nobody" in results[1].error

    def test_batch_defaults_to_all_patients(self, pipeline: MatchingPipeline) -> None:
        results = pipeline.batch_matches()
        assert len(results) == 7
        # endocrinology has no specialist slots, but primary care accepts Medicare
        by_id = {r.patient_id: r for r in results}
        assert by_id["PT-1044"].match_count == 1


class TestConfirmMatch:
    def test_books_slot_and_runs_workflow(
        self, pipeline: MatchingPipeline, memory_store: InMemoryProfileStore, outbox: OutboxNotificationSink
    ) -> None:
        async def confirm():
            confirmation = await pipeline.confirm_match("PT-1150", "demo_appt_1")
            occupied = memory_store.get_appointment("demo_appt_1").status
            run = await confirmation.wait()
            await pipeline.dispatcher.drain()
            return confirmation, occupied, run

        confirmation, occupied, run = asyncio.run(confirm())
        confirmed = confirmation.match

        assert occupied == SlotStatus.OCCUPIED
        assert confirmed.match_id == "PT-1150_demo_appt_1"
        assert confirmed.doctor.id == "doctor_1"
        assert confirmed.plan.priority == "critical"
        assert confirmed.scores.priority_tier == PriorityTier.CRITICAL_WITH_BARRIERS

        assert run.status == WorkflowStatus.COMPLETED
        assert [a.action for a in run.actions] == list(WorkflowAction)
        assert all(a.status == ActionStatus.COMPLETED for a in run.actions)

        slot = memory_store.get_appointment("demo_appt_1")
        assert slot.status == SlotStatus.CONFIRMED
        assert slot.patient_id == "PT-1150"

        recipients = [m.recipient for m in outbox.outbox]
        assert "+12125550150" in recipients
        assert "+12125550101" in recipients
        alerts = [m for m in outbox.outbox if m.metadata.get("type") == "care_team_alert"]
        assert len(alerts) == len(confirmed.plan.care_team_assignments)
        assert all(m.channel == NotificationChannel.PAGER for m in alerts)

        assert run.calendar_event.appointment_id == "demo_appt_1"
        assert run.room_preparation.room == "City Heart Center"
        assert run.room_preparation.assigned_patient_id == "PT-1150"

    def test_failed_step_is_recorded(self, memory_store: InMemoryProfileStore) -> None:
        sink = OutboxNotificationSink(fail_recipients={"+12125550150"})
        pipeline = MatchingPipeline(memory_store, sink=sink)

        async def confirm():
            confirmation = await pipeline.confirm_match("PT-1150", "demo_appt_1")
            return await confirmation.wait()

        run = asyncio.run(confirm())
        assert run.status == WorkflowStatus.COMPLETED_WITH_ERRORS
        failed = run.failed_actions
        assert [a.action for a in failed] == [WorkflowAction.SEND_PATIENT_NOTIFICATION]
        assert "+12125550150" in failed[0].error
        # later steps still ran
        assert memory_store.get_appointment("demo_appt_1").status == SlotStatus.CONFIRMED

    def test_slot_cannot_be_booked_twice(self, pipeline: MatchingPipeline) -> None:
        async def confirm_twice():
            await pipeline.confirm_match("PT-1150", "demo_appt_1")
            try:
                await pipeline.confirm_match("PT-1029", "demo_appt_1")
            finally:
                await pipeline.dispatcher.drain()

        with pytest.raises(SlotUnavailableError, match="demo_appt_1"):
            asyncio.run(confirm_twice())

    @pytest.mark.parametrize(("patient_id", "appointment_id"), [("nobody", "demo_appt_1"), ("PT-1150", "nowhere")])
    def test_unknown_records(self, pipeline: MatchingPipeline, patient_id: str, appointment_id: str) -> None:
        with pytest.raises(RecordNotFoundError):
            asyncio.run(pipeline.confirm_match(patient_id, appointment_id))


class TestWorkflowDispatcher:
    @pytest.fixture
    def scores(self, critical_patient: Patient, cardiology_slot: Appointment) -> MatchScore:
        return MatchRanker().score(critical_patient, cardiology_slot)

    def test_missing_slot_fails_calendar_step(
        self, critical_patient: Patient, cardiology_slot: Appointment, scores: MatchScore, outbox: OutboxNotificationSink
    ) -> None:
        dispatcher = WorkflowDispatcher(InMemoryProfileStore(), outbox)
        context = WorkflowContext(match_id="m-1", patient=critical_patient, appointment=cardiology_slot, scores=scores)

        run = asyncio.run(dispatcher.run(context))
        statuses = {a.action: a.status for a in run.actions}
        assert statuses[WorkflowAction.UPDATE_CALENDAR] == ActionStatus.FAILED
        assert statuses[WorkflowAction.PREPARE_ER_ROOM] == ActionStatus.COMPLETED
        assert run.priority == "critical"
        assert run.calendar_event is None
        assert run.room_preparation.appointment_id == cardiology_slot.id

    def test_each_run_keeps_its_own_records(
        self, critical_patient: Patient, scores: MatchScore, outbox: OutboxNotificationSink
    ) -> None:
        slots = [Appointment(id="A-1"), Appointment(id="A-2")]
        dispatcher = WorkflowDispatcher(InMemoryProfileStore(appointments=slots), outbox)

        async def run_both():
            return await asyncio.gather(*(
                dispatcher.run(
                    WorkflowContext(match_id=f"m-{s.id}", patient=critical_patient, appointment=s, scores=scores)
                )
                for s in slots
            ))

        runs = asyncio.run(run_both())
        assert [r.room_preparation.appointment_id for r in runs] == ["A-1", "A-2"]
        assert {r.room_preparation.room for r in runs} == {"Unassigned"}
        assert [r.calendar_event.appointment_id for r in runs] == ["A-1", "A-2"]

    def test_supported_channels(self) -> None:
        assert [c.value for c in NotificationChannel] == ["SMS", "Pager", "EHR Alert"]

    def test_sink_exceptions_become_failed_results(self) -> None:
        dispatcher = WorkflowDispatcher(InMemoryProfileStore(), ExplodingSink())
        message = Notification(channel=NotificationChannel.SMS, recipient="+1555", text="hello")

        async def send():
            task = dispatcher.dispatch([message, message])
            await dispatcher.drain()
            return task.result(), dispatcher.pending

        results, pending = asyncio.run(send())
        assert [r.success for r in results] == [False, False]
        assert results[0].error == "gateway down"
        assert pending == 0

    def test_submit_runs_in_background(
        self, critical_patient: Patient, cardiology_slot: Appointment, scores: MatchScore, outbox: OutboxNotificationSink
    ) -> None:
        store = InMemoryProfileStore(appointments=[cardiology_slot])
        dispatcher = WorkflowDispatcher(store, outbox)
        context = WorkflowContext(match_id="m-2", patient=critical_patient, appointment=cardiology_slot, scores=scores)

        async def submit():
            task = dispatcher.submit(context)
            await dispatcher.drain()
            return task.result()

        run = asyncio.run(submit())
        assert run.status == WorkflowStatus.COMPLETED
        assert store.get_appointment("A-1").status == SlotStatus.CONFIRMED
        assert [m.channel for m in outbox.outbox] == [NotificationChannel.SMS, NotificationChannel.PAGER]
        assert outbox.outbox[1].recipient == "D-1"
