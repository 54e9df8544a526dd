"""Exceptions raised at the application boundary.

The scoring and planning core never raises; these are used by the pipeline,
stores and CLI when a caller asks for something that does not exist or
cannot be done.
"""

from __future__ import annotations


class CareFlowError(Exception):
    """Base exception for all CareFlow errors."""


class RecordNotFoundError(CareFlowError):
    """A patient, doctor or appointment id is not present in the profile store."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} not found: {record_id}")


class SlotUnavailableError(CareFlowError):
    """An appointment slot cannot be booked because it is no longer available."""

    def __init__(self, appointment_id: str, status: str) -> None:
        self.appointment_id = appointment_id
        self.status = status
        super().__init__(f"Appointment {appointment_id} is not available (status: {status})")


class ValidationFailedError(CareFlowError):
    """A record is missing fields required for matching."""

    def __init__(self, record_id: str, errors: list[str]) -> None:
        self.record_id = record_id
        self.errors = errors
        super().__init__(f"Record {record_id or '<unknown>'} failed validation: {'; '.join(errors)}")


class NotificationDeliveryError(CareFlowError):
    """A notification sink reported a failed delivery."""

    def __init__(self, recipient: str, reason: str | None = None) -> None:
        self.recipient = recipient
        self.reason = reason
        super().__init__(f"Notification to {recipient} failed: {reason or 'unknown error'}")
