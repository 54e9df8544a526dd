"""Deterministic demo profiles for local runs and the ``seed`` command."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from careflow.core.models import Appointment, Doctor, Patient


if TYPE_CHECKING:
    from careflow.storage.base import ProfileStore

SLOT_TIMES = ("9:00 AM", "10:00 AM", "11:00 AM", "2:00 PM", "3:00 PM", "4:00 PM")
SLOTS_PER_DAY = 2
STANDARD_PLANS = ["Medicaid", "Medicare", "Private"]

DEMO_DOCTORS: tuple[tuple[Doctor, str, str, list[str]], ...] = (
    (Doctor(id="doctor_1", name="Dr. Sarah Jones", specialty="cardiology", phone="+12125550101"),
     "City Heart Center", "10001", STANDARD_PLANS),
    (Doctor(id="doctor_2", name="Dr. Michael Smith", specialty="primary_care", phone="+17185550102"),
     "Community Health Clinic", "11201", [*STANDARD_PLANS, "Uninsured"]),
    (Doctor(id="doctor_3", name="Dr. Priya Patel", specialty="orthopedics", phone="+12125550103"),
     "Manhattan Orthopedic Center", "10021", [*STANDARD_PLANS, "Commercial PPO"]),
    (Doctor(id="doctor_4", name="Dr. James Chen", specialty="neurology", phone="+17185550104"),
     "Queens Neurology Associates", "11375", STANDARD_PLANS),
)

DEMO_PATIENTS: tuple[Patient, ...] = (
    Patient(id="PT-1029", name="Ariana Mitchell", medical_condition="Complex cardiac arrhythmia",
            specialty="cardiology", wait_time_days=18, urgency_level=5, insurance="Medicaid",
            transportation="Public transit", zip_code="10453", language="English"),
    Patient(id="PT-1044", name="Luis Hernandez", medical_condition="Endocrine management",
            specialty="endocrinology", wait_time_days=12, urgency_level=4, insurance="Medicare",
            transportation="Rideshare support", zip_code="11207", language="Spanish"),
    Patient(id="PT-1087", name="Nora Caldwell", medical_condition="Post-surgical rehab",
            specialty="orthopedics", wait_time_days=21, urgency_level=4, insurance="Commercial PPO",
            transportation="Family driver", zip_code="10024"),
    Patient(id="PT-1103", name="Malik Johnson", medical_condition="Pulmonary consult",
            specialty="pulmonology", wait_time_days=9, urgency_level=3, insurance="Uninsured",
            transportation="Bus", zip_code="11212", income="Low"),
    Patient(id="PT-1132", name="Sahana Patel", medical_condition="High-risk prenatal care",
            specialty="ob_gyn", wait_time_days=15, urgency_level=5, insurance="Medicaid",
            transportation="Community shuttle", zip_code="10027", language="Gujarati"),
    Patient(id="PT-1150", name="Denise Walker", medical_condition="Chest pain with shortness of breath",
            specialty="cardiology", wait_time_days=2, ai_urgency_score=9, triage_level=2,
            insurance="Uninsured", transportation="Limited", zip_code="10002", income="Very low",
            housing_status="Unstable housing", phone="+12125550150"),
    Patient(id="PT-1168", name="Tomas Alvarez", medical_condition="Recurring migraines",
            specialty="neurology", wait_time_days=32, urgency_level=6, insurance="Medicare",
            transportation="Car", zip_code="11375", language="Spanish", support_network="Limited support"),
)


def _weekdays(start: date, days_ahead: int) -> list[date]:
    days = (start + timedelta(days=offset) for offset in range(1, days_ahead + 1))
    return [d for d in days if d.weekday() < 5]


def demo_appointments(start: date | None = None, days_ahead: int = 7) -> list[Appointment]:
    """Build weekday slots for every demo doctor, in a stable order."""
    start = start or date.today()
    appointments = []
    counter = 1
    for doctor, clinic, zip_code, plans in DEMO_DOCTORS:
        for index, day in enumerate(_weekdays(start, days_ahead)):
            for slot in range(SLOTS_PER_DAY):
                appointments.append(Appointment(
                    id=f"demo_appt_{counter}",
                    doctor_id=doctor.id,
                    doctor_name=doctor.name,
                    specialty=doctor.specialty,
                    clinic_name=clinic,
                    address=f"{clinic}, NY",
                    zip_code=zip_code,
                    date=day.isoformat(),
                    time=SLOT_TIMES[(index * SLOTS_PER_DAY + slot) % len(SLOT_TIMES)],
                    insurance_accepted=list(plans),
                    estimated_wait_minutes=15 + 10 * slot,
                    wheelchair_accessible=counter % 3 != 0,
                    public_transit_nearby=counter % 5 != 0,
                    languages_offered=["English"],
                ))
                counter += 1
    return appointments


def seed_store(store: ProfileStore, start: date | None = None, days_ahead: int = 7) -> dict[str, int]:
    """Write the demo doctors, patients and slots into ``store``."""
    for doctor, *_ in DEMO_DOCTORS:
        store.save_doctor(doctor)
    for patient in DEMO_PATIENTS:
        store.save_patient(patient)
    appointments = demo_appointments(start, days_ahead)
    for appointment in appointments:
        store.save_appointment(appointment)
    return {"doctors": len(DEMO_DOCTORS), "patients": len(DEMO_PATIENTS), "appointments": len(appointments)}
