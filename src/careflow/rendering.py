"""Template rendering for notification texts and HTML plan reports."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import DictLoader, Environment, select_autoescape

from careflow.scoring.equity import effective_urgency
from careflow.templates import MESSAGE_TEMPLATES, PLAN_REPORT_TEMPLATE


if TYPE_CHECKING:
    from careflow.core.models import Appointment, CoordinationPlan, Doctor, MatchScore, Patient

logger = logging.getLogger(__name__)

PLAN_REPORT_NAME = "plan_report.html"


def urgency_label(urgency: int) -> str:
    if urgency >= 8:
        return "CRITICAL"
    if urgency >= 5:
        return "URGENT"
    return "STANDARD"


class TemplateRenderer:
    """Renders the bundled jinja2 templates (or caller-supplied overrides)."""

    def __init__(self, overrides: dict[str, str] | None = None) -> None:
        templates = {**MESSAGE_TEMPLATES, PLAN_REPORT_NAME: PLAN_REPORT_TEMPLATE, **(overrides or {})}
        self._env = Environment(
            loader=DictLoader(templates),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def render(self, template_name: str, **data: Any) -> str:
        return self._env.get_template(template_name).render(**data)

    def patient_room_ready(self, patient: Patient, appointment: Appointment) -> str:
        return self.render(
            "patient_room_ready.txt",
            patient_name=patient.name or "there",
            location=appointment.location,
            clinic_name=appointment.clinic_name,
            address=appointment.address,
            estimated_wait_minutes=appointment.estimated_wait_minutes,
        )

    def doctor_patient_arrival(
        self, doctor: Doctor | None, patient: Patient, appointment: Appointment
    ) -> str:
        doctor_name = (doctor.name if doctor else None) or appointment.doctor_name or "Doctor"
        return self.render(
            "doctor_patient_arrival.txt",
            doctor_name=doctor_name,
            patient_name=patient.name or patient.id,
            condition=patient.medical_condition or "Emergency",
            triage_level=patient.triage_level,
            urgency_label=urgency_label(effective_urgency(patient)),
            location=appointment.location,
        )

    def care_team_alert(
        self, role: str, patient: Patient, appointment: Appointment, priority: str
    ) -> str:
        return self.render(
            "care_team_alert.txt",
            role=role,
            patient_name=patient.name or patient.id,
            condition=patient.medical_condition or "Emergency",
            location=appointment.location,
            priority=priority,
        )

    def plan_report(
        self,
        plan: CoordinationPlan,
        scores: MatchScore | None = None,
        patient: Patient | None = None,
    ) -> str:
        return self.render(
            PLAN_REPORT_NAME,
            plan=plan.to_document(),
            scores=scores.to_document() if scores else None,
            patient_name=patient.name if patient else None,
        )


def write_plan_report(
    plan: CoordinationPlan,
    output_path: str | Path,
    scores: MatchScore | None = None,
    patient: Patient | None = None,
    renderer: TemplateRenderer | None = None,
) -> Path:
    """Render a plan to HTML and write it to ``output_path``."""
    html_content = (renderer or TemplateRenderer()).plan_report(plan, scores=scores, patient=patient)
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html_content, encoding="utf-8")
    logger.info("Wrote coordination plan report to %s", output)
    return output
