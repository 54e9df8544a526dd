"""Notification message templates (jinja2 syntax)."""

PATIENT_ROOM_READY = (
    "Hi {{ patient_name }}, your room is ready! Please proceed to {{ location }}"
    "{% if clinic_name and clinic_name != location %} at {{ clinic_name }}{% endif %}"
    "{% if address %}, {{ address }}{% endif %}."
    "{% if estimated_wait_minutes is not none %} Estimated wait: {{ estimated_wait_minutes }} minutes.{% endif %}"
)

DOCTOR_PATIENT_ARRIVAL = (
    "{{ doctor_name }}, new patient arriving: {{ patient_name }} - {{ condition }}"
    " ({% if triage_level %}ESI {{ triage_level }}, {% endif %}{{ urgency_label }})."
    " Room: {{ location }}. Please review chart."
)

CARE_TEAM_ALERT = (
    "{{ role }} alert: New patient {{ patient_name }} - {{ condition }} in {{ location }}."
    " Priority: {{ priority }}."
)

MESSAGE_TEMPLATES: dict[str, str] = {
    "patient_room_ready.txt": PATIENT_ROOM_READY,
    "doctor_patient_arrival.txt": DOCTOR_PATIENT_ARRIVAL,
    "care_team_alert.txt": CARE_TEAM_ALERT,
}
