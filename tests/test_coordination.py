"""Tests for coordination plan generation and the rule tables."""

from __future__ import annotations

import pytest

from careflow.config.settings import PlanningSettings
from careflow.core.models import Appointment, Patient
from careflow.core.types import NotificationChannel, PriorityTier, RiskLevel
from careflow.planning.coordination import MODEL_VERSION, CoordinationPlanBuilder, priority_label
from careflow.planning.rules import PlanContext, Rule, always, evaluate, fired
from careflow.planning.rulesets import BOTTLENECK_RULES, no_bottlenecks, specialist_role
from careflow.scoring.matching import MatchRanker


@pytest.fixture
def er_room() -> Appointment:
    return Appointment(
        id="ER-SLOT-3",
        doctor_name="Dr. Sarah Jones",
        er_room="ER-3",
        clinic_name="City Heart Center",
        estimated_wait_minutes=45,
    )


@pytest.fixture
def routine_patient() -> Patient:
    return Patient(
        id="P-400",
        urgency_level=2,
        insurance="Private",
        transportation="Car",
        specialty="general_medicine",
        medical_condition="Annual physical",
    )


class TestCriticalPlan:
    def test_shape(self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment) -> None:
        plan = planner.build(1, critical_patient, er_room, match_id="m-1")
        assert plan.match_id == "m-1"
        assert plan.priority == "critical"
        assert plan.priority_tier == PriorityTier.CRITICAL_WITH_BARRIERS
        assert plan.model_version == MODEL_VERSION
        assert list(plan.timeline) == ["t0", "t1", "t2", "t3", "t4"]
        assert len(plan.reasoning_chain) == 6

    def test_care_team_includes_specialist(
        self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment
    ) -> None:
        team = planner.build(1, critical_patient, er_room).care_team_assignments
        assert [m.role for m in team] == ["Attending Physician", "Triage Nurse", "Medical Assistant", "Cardiologist"]
        assert team[0].name == "Dr. Sarah Jones"

    def test_resources(self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment) -> None:
        resources = {r.resource: r for r in planner.build(1, critical_patient, er_room).resource_allocation}
        assert resources["Cardiac Monitor"].status == "allocated"
        assert resources["Cardiac Monitor"].room == "ER-3"
        assert resources["Emergency Cart"].status == "standby"
        assert "Defibrillator" in resources

    def test_communication(self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment) -> None:
        items = planner.build(1, critical_patient, er_room).communication_plan
        assert [c.channel for c in items] == [
            NotificationChannel.SMS, NotificationChannel.PAGER, NotificationChannel.EHR_ALERT,
        ]
        assert "ER-3" in items[0].message

    def test_bottlenecks(self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment) -> None:
        bottlenecks = planner.build(1, critical_patient, er_room).potential_bottlenecks
        assert [(b.type, b.risk) for b in bottlenecks] == [
            ("Critical Priority", RiskLevel.HIGH),
            ("Wait Time", RiskLevel.MEDIUM),
            ("Transportation Barrier", RiskLevel.MEDIUM),
        ]

    def test_optimizations(self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment) -> None:
        suggestions = planner.build(1, critical_patient, er_room).optimization_suggestions
        assert [o.category for o in suggestions] == [
            "Health Equity",
            "Financial Navigation",
            "Discharge Planning",
            "Clinical Efficiency",
            "Clinical Protocol",
        ]

    def test_arrhythmia_gets_defibrillator(self, planner: CoordinationPlanBuilder) -> None:
        patient = Patient(medical_condition="Cardiac arrhythmia", specialty="cardiology")
        resources = planner.build(1, patient, Appointment()).resource_allocation
        assert ("Defibrillator", "standby") in [(r.resource, r.status) for r in resources]


class TestRoutinePlan:
    def test_fallback_items(self, planner: CoordinationPlanBuilder, routine_patient: Patient) -> None:
        plan = planner.build(4, routine_patient, Appointment(clinic_name="Community Health Clinic"))
        assert plan.priority == "standard"
        assert [(b.type, b.risk) for b in plan.potential_bottlenecks] == [("None Detected", RiskLevel.LOW)]
        assert [o.category for o in plan.optimization_suggestions] == ["Standard Care"]

    def test_no_specialist_for_general_medicine(self, planner: CoordinationPlanBuilder, routine_patient: Patient) -> None:
        plan = planner.build(4, routine_patient, Appointment())
        assert len(plan.care_team_assignments) == 3
        assert {r.resource for r in plan.resource_allocation} == {"Cardiac Monitor", "IV Equipment", "Emergency Cart"}
        assert plan.resource_allocation[0].room == "Unassigned"

    def test_wait_threshold_is_configurable(self, routine_patient: Patient) -> None:
        planner = CoordinationPlanBuilder(PlanningSettings(long_wait_minutes=10))
        plan = planner.build(4, routine_patient, Appointment(estimated_wait_minutes=20))
        assert [b.type for b in plan.potential_bottlenecks] == ["Wait Time"]


class TestDefaults:
    def test_empty_input(self, planner: CoordinationPlanBuilder) -> None:
        plan = planner.build(None)
        assert plan.match_id == "patient_slot"
        assert plan.priority_tier == PriorityTier.EXTENDED_WAIT
        assert plan.priority == "high"

    @pytest.mark.parametrize("tier", [0, 7, -1])
    def test_out_of_range_tier_uses_default(self, planner: CoordinationPlanBuilder, tier: int) -> None:
        assert planner.build(tier).priority_tier == PriorityTier.EXTENDED_WAIT

    def test_deterministic(self, planner: CoordinationPlanBuilder, critical_patient: Patient, er_room: Appointment) -> None:
        first = planner.build(1, critical_patient, er_room, match_id="m")
        second = planner.build(1, critical_patient, er_room, match_id="m")
        assert first.to_document() == second.to_document()

    def test_build_for_match_reuses_scores(
        self, planner: CoordinationPlanBuilder, waiting_patient: Patient, cardiology_slot: Appointment
    ) -> None:
        scores = MatchRanker().score(waiting_patient, cardiology_slot)
        plan = planner.build_for_match(scores, waiting_patient, cardiology_slot)
        assert plan.priority_tier == scores.priority_tier
        assert plan.match_id == "P-100_A-1"
        # equity score 123 is above the high-need threshold
        assert plan.optimization_suggestions[0].category == "Health Equity"

    @pytest.mark.parametrize(
        ("tier", "label"),
        [
            (PriorityTier.CRITICAL_WITH_BARRIERS, "critical"),
            (PriorityTier.EMERGENT, "critical"),
            (PriorityTier.EXTENDED_WAIT, "high"),
            (PriorityTier.STANDARD, "standard"),
        ],
    )
    def test_priority_label(self, tier: PriorityTier, label: str) -> None:
        assert priority_label(tier) == label


class TestRules:
    @pytest.fixture
    def context(self, critical_patient: Patient) -> PlanContext:
        return PlanContext(
            priority_tier=PriorityTier.EMERGENT,
            patient=critical_patient,
            appointment=Appointment(estimated_wait_minutes=5),
            equity_score=140,
        )

    def test_evaluate_keeps_rule_order(self, context: PlanContext) -> None:
        rules = (
            Rule("second", always, lambda _: "b"),
            Rule("never", lambda _: False, lambda _: "x"),
            Rule("first", always, lambda _: "a"),
        )
        assert evaluate(rules, context) == ["b", "a"]

    def test_fallback_only_when_nothing_fires(self, context: PlanContext) -> None:
        never = (Rule("never", lambda _: False, lambda _: "x"),)
        assert evaluate(never, context, fallback=lambda _: "fallback") == ["fallback"]
        assert evaluate(never, context) == []

    def test_fired_names(self, context: PlanContext) -> None:
        assert fired(BOTTLENECK_RULES, context) == ["critical_priority", "transportation_barrier"]

    def test_fallback_bottleneck(self, context: PlanContext) -> None:
        assert no_bottlenecks(context).risk == RiskLevel.LOW

    @pytest.mark.parametrize(
        ("specialty", "role"),
        [("cardiology", "Cardiologist"), ("OB_GYN", "OB/GYN Specialist"), ("dermatology", "Specialist"), (None, "Specialist")],
    )
    def test_specialist_role(self, specialty: str | None, role: str) -> None:
        assert specialist_role(specialty) == role
