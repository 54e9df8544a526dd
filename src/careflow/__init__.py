"""CareFlow Exchange - Equity-aware matching of patients to appointments.

This package provides:
- Equity scoring from clinical urgency and social determinants of health
- Composite match scoring, priority tiers and ranking of appointment slots
- Rule-driven care coordination plans for confirmed matches
- Profile stores, notification sinks and an asyncio post-match workflow
"""

from __future__ import annotations

from careflow.config.settings import Settings
from careflow.core.models import (
    Appointment,
    CoordinationPlan,
    Doctor,
    MatchScore,
    Patient,
    RankedMatch,
)
from careflow.core.types import PriorityTier
from careflow.orchestrator.pipeline import MatchingPipeline
from careflow.planning.coordination import CoordinationPlanBuilder
from careflow.scoring.equity import EquityScorer
from careflow.scoring.matching import MatchRanker


__version__ = "0.1.0"

__all__ = [
    "Appointment",
    "CoordinationPlan",
    "CoordinationPlanBuilder",
    "Doctor",
    "EquityScorer",
    "MatchRanker",
    "MatchScore",
    "MatchingPipeline",
    "Patient",
    "PriorityTier",
    "RankedMatch",
    "Settings",
]
