"""In-memory profile store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from careflow.core.utils import normalize_key
from careflow.storage.base import ProfileStore


if TYPE_CHECKING:
    from collections.abc import Iterable

    from careflow.core.models import Appointment, Doctor, Patient
    from careflow.core.types import SlotStatus


class InMemoryProfileStore(ProfileStore):
    """Dictionary-backed store for tests, demos and embedding callers."""

    def __init__(
        self,
        patients: Iterable[Patient] = (),
        doctors: Iterable[Doctor] = (),
        appointments: Iterable[Appointment] = (),
    ) -> None:
        self._patients = {p.id: p.model_copy(deep=True) for p in patients}
        self._doctors = {d.id: d.model_copy(deep=True) for d in doctors}
        self._appointments = {a.id: a.model_copy(deep=True) for a in appointments}

    def get_patient(self, patient_id: str) -> Patient | None:
        patient = self._patients.get(patient_id)
        return patient.model_copy(deep=True) if patient else None

    def get_doctor(self, doctor_id: str) -> Doctor | None:
        doctor = self._doctors.get(doctor_id)
        return doctor.model_copy(deep=True) if doctor else None

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        appointment = self._appointments.get(appointment_id)
        return appointment.model_copy(deep=True) if appointment else None

    def list_patients(self) -> list[Patient]:
        return [p.model_copy(deep=True) for p in self._patients.values()]

    def list_appointments(
        self, status: SlotStatus | None = None, specialty: str | None = None
    ) -> list[Appointment]:
        return [
            a.model_copy(deep=True)
            for a in self._appointments.values()
            if (status is None or a.status == status)
            and (specialty is None or normalize_key(a.specialty) == normalize_key(specialty))
        ]

    def save_patient(self, patient: Patient) -> str:
        self._patients[patient.id] = patient.model_copy(deep=True)
        return patient.id

    def save_doctor(self, doctor: Doctor) -> str:
        self._doctors[doctor.id] = doctor.model_copy(deep=True)
        return doctor.id

    def save_appointment(self, appointment: Appointment) -> str:
        self._appointments[appointment.id] = appointment.model_copy(deep=True)
        return appointment.id

    def update_appointment_status(
        self, appointment_id: str, status: SlotStatus, patient_id: str | None = None
    ) -> Appointment | None:
        appointment = self._appointments.get(appointment_id)
        if appointment is None:
            return None
        update: dict[str, object] = {"status": status}
        if patient_id is not None:
            update["patient_id"] = patient_id
        self._appointments[appointment_id] = appointment.model_copy(update=update)
        return self._appointments[appointment_id].model_copy(deep=True)
