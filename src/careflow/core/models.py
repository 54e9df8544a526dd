"""Data models for the CareFlow matching system."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from careflow.core.types import (  # noqa: TC001 - Pydantic needs at runtime
    ActionStatus,
    NotificationChannel,
    PriorityTier,
    RiskLevel,
    SlotStatus,
    WorkflowAction,
    WorkflowStatus,
)


class CareFlowModel(BaseModel):
    """Base model accepting both camelCase document keys and snake_case names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_document(self) -> dict[str, Any]:
        """Serialize with camelCase keys, as stored and exchanged."""
        return self.model_dump(mode="json", by_alias=True)


class Patient(CareFlowModel):
    """A patient waiting for care.

    Every field except ``id`` is optional; scoring substitutes documented
    defaults for anything missing.
    """
    id: str = ""
    name: str | None = None
    urgency_level: int | None = None
    ai_urgency_score: float | None = None
    triage_level: int | None = None
    wait_time_days: int | None = None
    insurance: str | None = None
    transportation: str | None = None
    specialty: str | None = None
    medical_condition: str | None = None
    zip_code: str | None = None
    language: str | None = None
    income: str | None = None
    housing_status: str | None = None
    food_security: str | None = None
    employment_status: str | None = None
    language_barrier: str | None = None
    support_network: str | None = None
    email: str | None = None
    phone: str | None = None


class Doctor(CareFlowModel):
    """A treating physician."""
    id: str = ""
    name: str | None = None
    specialty: str | None = None
    email: str | None = None
    phone: str | None = None


class Appointment(CareFlowModel):
    """A bookable appointment slot (or ER room)."""
    id: str = ""
    doctor_id: str | None = None
    doctor_name: str | None = None
    specialty: str | None = None
    clinic_name: str | None = None
    address: str | None = None
    zip_code: str | None = None
    er_room: str | None = None
    date: str | None = None
    time: str | None = None
    insurance_accepted: list[str] = Field(default_factory=list)
    estimated_wait_minutes: int | None = None
    status: SlotStatus = SlotStatus.AVAILABLE
    patient_id: str | None = None
    wheelchair_accessible: bool | None = None
    public_transit_nearby: bool | None = None
    languages_offered: list[str] = Field(default_factory=list)

    @property
    def location(self) -> str:
        """Room, clinic or a placeholder, whichever is known first."""
        return self.er_room or self.clinic_name or "Unassigned"


class EquityFactor(CareFlowModel):
    """One contribution to a patient's equity score."""
    label: str
    score: int
    description: str


class EquityBreakdown(CareFlowModel):
    """Equity score with the factors that produced it, largest first."""
    total: int
    factors: list[EquityFactor] = Field(default_factory=list)


class EquityTier(CareFlowModel):
    """Equity need bucket derived from an equity score."""
    tier: str
    level: int
    color: str
    description: str


class MatchScore(CareFlowModel):
    """Scoring breakdown for a patient-appointment pair."""
    urgency_score: float
    wait_time_score: float
    distance_score: float
    barrier_bonus: float
    insurance_match_score: float
    total_match_score: int = Field(ge=0, le=100)
    priority_tier: PriorityTier
    reasoning_explanation: str
    equity_score: int


class MatchQuality(CareFlowModel):
    """Display rating for a match."""
    rating: str
    label: str
    color: str


class RankedMatch(CareFlowModel):
    """An appointment paired with its match score."""
    appointment: Appointment
    scores: MatchScore
    quality: MatchQuality

    @property
    def appointment_id(self) -> str:
        return self.appointment.id


class RankedPatient(CareFlowModel):
    """A waiting patient paired with their score against one appointment."""
    patient: Patient
    scores: MatchScore


class BatchMatchResult(CareFlowModel):
    """Per-patient outcome of a batch matching run."""
    patient_id: str
    matches: list[RankedMatch] = Field(default_factory=list)
    error: str | None = None

    @property
    def match_count(self) -> int:
        return len(self.matches)


class CareTeamAssignment(CareFlowModel):
    role: str
    name: str
    action: str
    eta: str


class ResourceAllocation(CareFlowModel):
    resource: str
    status: str
    room: str


class CommunicationItem(CareFlowModel):
    channel: NotificationChannel
    recipient: str
    message: str
    timing: str


class Bottleneck(CareFlowModel):
    type: str
    risk: RiskLevel
    description: str
    mitigation: str


class OptimizationSuggestion(CareFlowModel):
    category: str
    suggestion: str
    rationale: str
    impact: str


class CoordinationPlan(CareFlowModel):
    """Static care coordination plan for a confirmed match."""
    match_id: str
    priority: str
    priority_tier: PriorityTier
    care_team_assignments: list[CareTeamAssignment] = Field(default_factory=list)
    resource_allocation: list[ResourceAllocation] = Field(default_factory=list)
    communication_plan: list[CommunicationItem] = Field(default_factory=list)
    timeline: dict[str, str] = Field(default_factory=dict)
    potential_bottlenecks: list[Bottleneck] = Field(default_factory=list)
    optimization_suggestions: list[OptimizationSuggestion] = Field(default_factory=list)
    reasoning_chain: list[str] = Field(default_factory=list)
    model_version: str = ""


class Notification(CareFlowModel):
    """A structured message handed to a notification sink."""
    channel: NotificationChannel
    recipient: str
    text: str
    priority: str = "standard"
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationResult(CareFlowModel):
    """Delivery outcome reported by a notification sink."""
    success: bool
    channel: NotificationChannel
    recipient: str
    error: str | None = None


class ActionResult(CareFlowModel):
    """Outcome of one workflow action."""
    action: WorkflowAction
    status: ActionStatus = ActionStatus.PENDING
    error: str | None = None
    completed_at: datetime | None = None


class CalendarEvent(CareFlowModel):
    """Calendar entry created when a match is booked."""
    doctor_id: str | None
    patient_id: str
    appointment_id: str
    title: str
    start_time: datetime
    estimated_duration: int
    location: str


class RoomPreparation(CareFlowModel):
    """Room readiness record created for an incoming patient."""
    room: str
    status: str
    assigned_patient_id: str
    appointment_id: str
    priority: PriorityTier
    assigned_at: datetime
    expected_arrival: datetime


class WorkflowRun(CareFlowModel):
    """Result of running the post-match workflow for one match."""
    workflow_id: str
    match_id: str
    priority: str
    status: WorkflowStatus = WorkflowStatus.PENDING
    actions: list[ActionResult] = Field(default_factory=list)
    triggered_at: datetime = Field(default_factory=datetime.now)
    calendar_event: CalendarEvent | None = None
    room_preparation: RoomPreparation | None = None
    completed_at: datetime | None = None

    @property
    def failed_actions(self) -> list[ActionResult]:
        return [a for a in self.actions if a.status == ActionStatus.FAILED]


class ConfirmedMatch(CareFlowModel):
    """A booked match with its coordination plan."""
    match_id: str
    patient: Patient
    appointment: Appointment
    doctor: Doctor | None = None
    scores: MatchScore
    plan: CoordinationPlan
    confirmed_at: datetime = Field(default_factory=datetime.now)
