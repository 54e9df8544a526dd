"""Profile store interface consumed by the matching pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from careflow.core.models import Appointment, Doctor, Patient
    from careflow.core.types import SlotStatus


class ProfileStore(ABC):
    """Lookup and persistence for patient, doctor and appointment records.

    Getters return ``None`` for unknown ids; existence checks are the
    caller's responsibility. No transactional guarantees are implied.
    """

    @abstractmethod
    def get_patient(self, patient_id: str) -> Patient | None: ...

    @abstractmethod
    def get_doctor(self, doctor_id: str) -> Doctor | None: ...

    @abstractmethod
    def get_appointment(self, appointment_id: str) -> Appointment | None: ...

    @abstractmethod
    def list_patients(self) -> list[Patient]: ...

    @abstractmethod
    def list_appointments(
        self, status: SlotStatus | None = None, specialty: str | None = None
    ) -> list[Appointment]:
        """List appointments in insertion order, optionally filtered."""
        ...

    @abstractmethod
    def save_patient(self, patient: Patient) -> str: ...

    @abstractmethod
    def save_doctor(self, doctor: Doctor) -> str: ...

    @abstractmethod
    def save_appointment(self, appointment: Appointment) -> str: ...

    @abstractmethod
    def update_appointment_status(
        self, appointment_id: str, status: SlotStatus, patient_id: str | None = None
    ) -> Appointment | None:
        """Set a slot's status (and booked patient); returns the updated slot."""
        ...

    def get_stats(self) -> dict[str, Any]:
        appointments = self.list_appointments()
        by_status: dict[str, int] = {}
        for appointment in appointments:
            by_status[appointment.status.value] = by_status.get(appointment.status.value, 0) + 1
        return {
            "patients": len(self.list_patients()),
            "appointments": len(appointments),
            "by_status": by_status,
        }
