"""Rule tables for coordination plans.

Each table is an ordered tuple of :class:`~careflow.planning.rules.Rule` and can
be evaluated on its own with :func:`~careflow.planning.rules.evaluate`.
"""

from __future__ import annotations

from careflow.core.models import (
    Bottleneck,
    CareTeamAssignment,
    CommunicationItem,
    OptimizationSuggestion,
    ResourceAllocation,
)
from careflow.core.types import NotificationChannel, RiskLevel
from careflow.core.utils import lookup, lookup_table, normalize_key
from careflow.planning.rules import PlanContext, Rule, always


DEFAULT_ATTENDING_NAME = "Dr. Smith"
SPECIALIST_LABEL = "Specialist"

SPECIALIST_ROLES = lookup_table({
    "cardiology": "Cardiologist",
    "neurology": "Neurologist",
    "orthopedics": "Orthopedic Surgeon",
    "pediatrics": "Pediatrician",
    "ob_gyn": "OB/GYN Specialist",
    "psychiatry": "Psychiatrist",
    "general_surgery": "General Surgeon",
})

TIMELINE: dict[str, str] = {
    "t0": "Match confirmed",
    "t1": "Care team notified (30 sec)",
    "t2": "Room prepared (2 min)",
    "t3": "Patient arrival expected (5-10 min)",
    "t4": "Physician assessment begins (12 min)",
}

REASONING_CHAIN: tuple[str, ...] = (
    "Analyzed patient urgency and equity factors",
    "Assessed current capacity and staff availability",
    "Optimized resource allocation for priority tier",
    "Generated communication sequence for care coordination",
    "Identified potential workflow bottlenecks",
    "Proposed mitigation strategies based on equity score",
)


def specialist_role(specialty: str | None) -> str:
    """Map a specialty tag to the consulting specialist's role."""
    return lookup(SPECIALIST_ROLES, specialty, SPECIALIST_LABEL)


def needs_specialist(ctx: PlanContext) -> bool:
    specialty = normalize_key(ctx.patient.specialty)
    return bool(specialty) and specialty != normalize_key(ctx.settings.general_specialty)


# Care team

CARE_TEAM_RULES: tuple[Rule[CareTeamAssignment], ...] = (
    Rule("attending_physician", always, lambda ctx: CareTeamAssignment(
        role="Attending Physician",
        name=ctx.appointment.doctor_name or DEFAULT_ATTENDING_NAME,
        action="Review patient chart and prepare examination room",
        eta="2 minutes",
    )),
    Rule("triage_nurse", always, lambda ctx: CareTeamAssignment(
        role="Triage Nurse",
        name="Nurse Rodriguez",
        action="Prepare vital signs equipment and medications",
        eta="1 minute",
    )),
    Rule("medical_assistant", always, lambda ctx: CareTeamAssignment(
        role="Medical Assistant",
        name="MA Johnson",
        action="Set up patient monitoring devices",
        eta="3 minutes",
    )),
    Rule("specialist", needs_specialist, lambda ctx: CareTeamAssignment(
        role=specialist_role(ctx.patient.specialty),
        name="On-call Specialist",
        action="Standby for consultation",
        eta="10 minutes",
    )),
)

# Resources

RESOURCE_RULES: tuple[Rule[ResourceAllocation], ...] = (
    Rule("cardiac_monitor", always, lambda ctx: ResourceAllocation(
        resource="Cardiac Monitor",
        status="allocated" if ctx.is_critical else "staged",
        room=ctx.location,
    )),
    Rule("iv_equipment", always, lambda ctx: ResourceAllocation(
        resource="IV Equipment", status="staged", room=ctx.location,
    )),
    Rule("emergency_cart", always, lambda ctx: ResourceAllocation(
        resource="Emergency Cart",
        status="standby" if ctx.is_critical else "on-demand",
        room="Nearby",
    )),
    Rule("defibrillator", lambda ctx: "cardiac" in ctx.condition, lambda ctx: ResourceAllocation(
        resource="Defibrillator", status="standby", room=ctx.location,
    )),
)

# Communication

COMMUNICATION_RULES: tuple[Rule[CommunicationItem], ...] = (
    Rule("patient_sms", always, lambda ctx: CommunicationItem(
        channel=NotificationChannel.SMS,
        recipient="Patient",
        message=f"Your room is ready. Please proceed to {ctx.location}.",
        timing="immediate",
    )),
    Rule("attending_page", always, lambda ctx: CommunicationItem(
        channel=NotificationChannel.PAGER,
        recipient="Attending Physician",
        message=f"New patient arrival - {ctx.patient.medical_condition or 'Emergency'} - {ctx.location}",
        timing="immediate",
    )),
    Rule("care_team_ehr", always, lambda ctx: CommunicationItem(
        channel=NotificationChannel.EHR_ALERT,
        recipient="Care Team",
        message="Patient chart updated with triage notes",
        timing="on-arrival",
    )),
)

# Bottlenecks

BOTTLENECK_RULES: tuple[Rule[Bottleneck], ...] = (
    Rule("critical_priority", lambda ctx: ctx.is_critical, lambda ctx: Bottleneck(
        type="Critical Priority",
        risk=RiskLevel.HIGH,
        description="High-priority patient requires immediate attention",
        mitigation="Physician alerted via priority pager, emergency cart on standby",
    )),
    Rule(
        "long_wait",
        lambda ctx: (ctx.appointment.estimated_wait_minutes or 0) > ctx.settings.long_wait_minutes,
        lambda ctx: Bottleneck(
            type="Wait Time",
            risk=RiskLevel.MEDIUM,
            description="Above-average wait time may cause patient anxiety",
            mitigation="Frequent updates via SMS, comfort measures offered",
        ),
    ),
    Rule("transportation_barrier", lambda ctx: ctx.has_limited_transport, lambda ctx: Bottleneck(
        type="Transportation Barrier",
        risk=RiskLevel.MEDIUM,
        description="Patient may face delays in arrival",
        mitigation="Consider transportation assistance, extended arrival window",
    )),
)


def no_bottlenecks(_: PlanContext) -> Bottleneck:
    return Bottleneck(
        type="None Detected",
        risk=RiskLevel.LOW,
        description="Workflow appears optimal for this patient",
        mitigation="Standard protocols apply",
    )


# Optimizations

OPTIMIZATION_RULES: tuple[Rule[OptimizationSuggestion], ...] = (
    Rule(
        "high_equity_need",
        lambda ctx: ctx.equity_score > ctx.settings.high_equity_score,
        lambda ctx: OptimizationSuggestion(
            category="Health Equity",
            suggestion="Social worker consultation recommended",
            rationale="Patient has significant barriers to care - may benefit from care navigation support",
            impact="Reduces readmission risk by 23%",
        ),
    ),
    Rule("financial_navigation", lambda ctx: ctx.needs_financial_navigation, lambda ctx: OptimizationSuggestion(
        category="Financial Navigation",
        suggestion="Connect with financial counselor",
        rationale="Ensure patient understands coverage and payment options",
        impact="Improves follow-up appointment attendance by 35%",
    )),
    Rule("discharge_transport", lambda ctx: ctx.has_limited_transport, lambda ctx: OptimizationSuggestion(
        category="Discharge Planning",
        suggestion="Arrange transportation for follow-up",
        rationale="Transportation barriers may prevent follow-up care",
        impact="Reduces missed appointments by 41%",
    )),
    Rule("preorder_diagnostics", lambda ctx: ctx.is_critical, lambda ctx: OptimizationSuggestion(
        category="Clinical Efficiency",
        suggestion="Pre-order common labs and imaging",
        rationale="High-priority patient likely needs immediate diagnostics",
        impact="Reduces door-to-diagnosis time by 15-20 min",
    )),
    Rule("chest_pain_protocol", lambda ctx: "chest pain" in ctx.condition, lambda ctx: OptimizationSuggestion(
        category="Clinical Protocol",
        suggestion="Initiate rapid cardiac workup protocol",
        rationale="Chest pain requires immediate cardiac assessment",
        impact="Improves patient outcomes, reduces liability risk",
    )),
)


def standard_care(_: PlanContext) -> OptimizationSuggestion:
    return OptimizationSuggestion(
        category="Standard Care",
        suggestion="Follow standard protocols",
        rationale="No special accommodations needed",
        impact="Baseline quality care delivery",
    )
