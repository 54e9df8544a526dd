"""SQLite-backed profile store."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from careflow.core.models import Appointment, Doctor, Patient
from careflow.storage.base import ProfileStore
from careflow.storage.converters import model_to_document, row_to_model, specialty_key
from careflow.storage.schema import INIT_SCHEMA


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from careflow.core.types import SlotStatus


class SQLiteProfileStore(ProfileStore):
    """SQLite store keeping each record as a JSON document with indexed columns."""

    def __init__(self, db_path: str | Path = "careflow.db") -> None:
        self.db_path = Path(db_path)
        self._init_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._connection() as conn:
            conn.executescript(INIT_SCHEMA)

    # Lookups

    def get_patient(self, patient_id: str) -> Patient | None:
        with self._connection() as conn:
            row = conn.execute("SELECT document FROM patients WHERE id = ?", (patient_id,)).fetchone()
        return row_to_model(row, Patient) if row else None

    def get_doctor(self, doctor_id: str) -> Doctor | None:
        with self._connection() as conn:
            row = conn.execute("SELECT document FROM doctors WHERE id = ?", (doctor_id,)).fetchone()
        return row_to_model(row, Doctor) if row else None

    def get_appointment(self, appointment_id: str) -> Appointment | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT document FROM appointments WHERE id = ?", (appointment_id,)
            ).fetchone()
        return row_to_model(row, Appointment) if row else None

    def list_patients(self) -> list[Patient]:
        with self._connection() as conn:
            rows = conn.execute("SELECT document FROM patients ORDER BY id").fetchall()
        return [row_to_model(r, Patient) for r in rows]

    def list_appointments(
        self, status: SlotStatus | None = None, specialty: str | None = None
    ) -> list[Appointment]:
        conditions, params = [], []
        if status is not None:
            conditions.append("status = ?")
            params.append(status.value)
        if specialty is not None:
            conditions.append("specialty = ?")
            params.append(specialty_key(specialty))
        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        with self._connection() as conn:
            rows = conn.execute(
                f"SELECT document FROM appointments {where} ORDER BY seq", params
            ).fetchall()
        return [row_to_model(r, Appointment) for r in rows]

    # Writes

    def save_patient(self, patient: Patient) -> str:
        with self._connection() as conn:
            conn.execute(
                """INSERT INTO patients (id, specialty, document) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET specialty = excluded.specialty,
                document = excluded.document, updated_at = CURRENT_TIMESTAMP""",
                (patient.id, specialty_key(patient.specialty), model_to_document(patient)),
            )
        return patient.id

    def save_doctor(self, doctor: Doctor) -> str:
        with self._connection() as conn:
            conn.execute(
                """INSERT INTO doctors (id, specialty, document) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET specialty = excluded.specialty,
                document = excluded.document, updated_at = CURRENT_TIMESTAMP""",
                (doctor.id, specialty_key(doctor.specialty), model_to_document(doctor)),
            )
        return doctor.id

    def save_appointment(self, appointment: Appointment) -> str:
        with self._connection() as conn:
            conn.execute(
                """INSERT INTO appointments (id, doctor_id, specialty, status, document)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET doctor_id = excluded.doctor_id,
                specialty = excluded.specialty, status = excluded.status,
                document = excluded.document, updated_at = CURRENT_TIMESTAMP""",
                (appointment.id, appointment.doctor_id, specialty_key(appointment.specialty),
                 appointment.status.value, model_to_document(appointment)),
            )
        return appointment.id

    def save_appointments(self, appointments: Iterable[Appointment]) -> list[str]:
        return [self.save_appointment(a) for a in appointments]

    def update_appointment_status(
        self, appointment_id: str, status: SlotStatus, patient_id: str | None = None
    ) -> Appointment | None:
        appointment = self.get_appointment(appointment_id)
        if appointment is None:
            return None
        appointment.status = status
        if patient_id is not None:
            appointment.patient_id = patient_id
        self.save_appointment(appointment)
        return appointment

    def get_stats(self) -> dict[str, Any]:
        with self._connection() as conn:
            patients = conn.execute("SELECT COUNT(*) as cnt FROM patients").fetchone()["cnt"]
            doctors = conn.execute("SELECT COUNT(*) as cnt FROM doctors").fetchone()["cnt"]
            total = conn.execute("SELECT COUNT(*) as cnt FROM appointments").fetchone()["cnt"]
            by_status = conn.execute(
                "SELECT status, COUNT(*) as cnt FROM appointments GROUP BY status"
            ).fetchall()
            by_specialty = conn.execute(
                "SELECT specialty, COUNT(*) as cnt FROM appointments GROUP BY specialty"
            ).fetchall()
        return {
            "patients": patients,
            "doctors": doctors,
            "appointments": total,
            "by_status": {r["status"]: r["cnt"] for r in by_status},
            "by_specialty": {(r["specialty"] or "unspecified"): r["cnt"] for r in by_specialty},
        }
