"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from careflow.config.settings import Settings
from careflow.core.models import Appointment, Patient
from careflow.demo import seed_store
from careflow.notifications.sink import OutboxNotificationSink
from careflow.planning.coordination import CoordinationPlanBuilder
from careflow.scoring.equity import EquityScorer
from careflow.scoring.matching import MatchRanker
from careflow.storage.memory import InMemoryProfileStore


if TYPE_CHECKING:
    from collections.abc import Generator

# A Monday, so the demo week yields five weekdays of slots.
DEMO_START = date(2026, 1, 5)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CAREFLOW_* variables from the host out of the tests."""
    for name in (
        "CAREFLOW_MATCH_LIMIT",
        "CAREFLOW_DISTINCT_DOCTORS",
        "CAREFLOW_CRITICAL_URGENCY",
        "CAREFLOW_EXTENDED_WAIT_DAYS",
        "CAREFLOW_LONG_WAIT_MINUTES",
        "CAREFLOW_DB_PATH",
        "CAREFLOW_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def scorer() -> EquityScorer:
    return EquityScorer()


@pytest.fixture
def ranker() -> MatchRanker:
    return MatchRanker()


@pytest.fixture
def planner() -> CoordinationPlanBuilder:
    return CoordinationPlanBuilder()


@pytest.fixture
def waiting_patient() -> Patient:
    """Moderate urgency, long wait, Medicaid and public transit."""
    return Patient(
        id="P-100",
        name="Ariana Mitchell",
        urgency_level=5,
        wait_time_days=18,
        insurance="Medicaid",
        transportation="Public transit",
        specialty="cardiology",
        medical_condition="Complex cardiac arrhythmia",
        zip_code="10453",
    )


@pytest.fixture
def critical_patient() -> Patient:
    """High urgency with transport and insurance barriers."""
    return Patient(
        id="P-200",
        name="Denise Walker",
        ai_urgency_score=9,
        urgency_level=4,
        wait_time_days=2,
        insurance="Uninsured",
        transportation="Limited",
        specialty="cardiology",
        medical_condition="Chest pain, suspected cardiac event",
        zip_code="10002",
        phone="+12125550150",
    )


@pytest.fixture
def cardiology_slot() -> Appointment:
    return Appointment(
        id="A-1",
        doctor_id="D-1",
        doctor_name="Dr. Sarah Jones",
        specialty="cardiology",
        clinic_name="City Heart Center",
        zip_code="10453",
        insurance_accepted=["Medicaid", "Medicare"],
        estimated_wait_minutes=20,
    )


@pytest.fixture
def memory_store() -> InMemoryProfileStore:
    """In-memory store loaded with the demo week."""
    store = InMemoryProfileStore()
    seed_store(store, start=DEMO_START)
    return store


@pytest.fixture
def outbox() -> OutboxNotificationSink:
    return OutboxNotificationSink()


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create temporary output directory."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    yield output_dir
