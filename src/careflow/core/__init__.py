"""Core module - Shared models, types and errors."""

from __future__ import annotations

from careflow.core.exceptions import (
    CareFlowError,
    RecordNotFoundError,
    SlotUnavailableError,
    ValidationFailedError,
)
from careflow.core.models import (
    Appointment,
    CoordinationPlan,
    Doctor,
    EquityBreakdown,
    MatchScore,
    Notification,
    NotificationResult,
    Patient,
    RankedMatch,
    WorkflowRun,
)
from careflow.core.types import PriorityTier, SlotStatus, WorkflowAction


__all__ = [
    "Appointment",
    "CareFlowError",
    "CoordinationPlan",
    "Doctor",
    "EquityBreakdown",
    "MatchScore",
    "Notification",
    "NotificationResult",
    "Patient",
    "PriorityTier",
    "RankedMatch",
    "RecordNotFoundError",
    "SlotStatus",
    "SlotUnavailableError",
    "ValidationFailedError",
    "WorkflowAction",
    "WorkflowRun",
]
