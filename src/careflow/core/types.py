"""Core type definitions and enums."""

from __future__ import annotations

from enum import Enum, IntEnum


class PriorityTier(IntEnum):
    """Ordinal priority buckets for a match (1 = highest priority)."""

    CRITICAL_WITH_BARRIERS = 1
    EMERGENT = 2
    EXTENDED_WAIT = 3
    STANDARD = 4


class SlotStatus(str, Enum):
    """Lifecycle of an appointment slot."""

    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CONFIRMED = "confirmed"


class RiskLevel(str, Enum):
    """Risk rating attached to a workflow bottleneck."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationChannel(str, Enum):
    """Delivery channels understood by notification sinks."""

    SMS = "SMS"
    PAGER = "Pager"
    EHR_ALERT = "EHR Alert"


class WorkflowAction(str, Enum):
    """Post-match actions, executed in declaration order."""

    SEND_PATIENT_NOTIFICATION = "send_patient_notification"
    SEND_DOCTOR_NOTIFICATION = "send_doctor_notification"
    UPDATE_CALENDAR = "update_calendar"
    PREPARE_ER_ROOM = "prepare_er_room"


class ActionStatus(str, Enum):
    """Status of a single workflow action."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowStatus(str, Enum):
    """Overall status of a workflow run."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
