"""Equity scoring: prioritizes patients by access barriers and clinical urgency.

A higher score means more barriers to care. The score is a plain weighted sum
over lookup tables, so it is deterministic and side-effect free.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from careflow.core.models import EquityBreakdown, EquityFactor, EquityTier
from careflow.core.utils import clamp, lookup, normalize_key, round_half_up
from careflow.scoring.tables import (
    DEFAULT_ACCESS_WEIGHT,
    EMPLOYMENT_WEIGHTS,
    FOOD_SECURITY_WEIGHTS,
    HOUSING_WEIGHTS,
    INCOME_WEIGHTS,
    INSURANCE_WEIGHTS,
    LANGUAGE_BARRIER_WEIGHTS,
    SUPPORT_NETWORK_WEIGHTS,
    TRANSPORT_WEIGHTS,
)


if TYPE_CHECKING:
    from careflow.core.models import Patient

logger = logging.getLogger(__name__)

MIN_URGENCY, MAX_URGENCY = 1, 10
WAIT_POINTS_PER_DAY = 2
MAX_WAIT_POINTS = 40
URGENCY_POINTS_PER_LEVEL = 12

# (score threshold, tier) ordered from highest need down
EQUITY_TIERS: tuple[tuple[int, EquityTier], ...] = (
    (100, EquityTier(tier="Critical Equity", level=1, color="red",
                     description="Multiple significant barriers to care - highest priority")),
    (70, EquityTier(tier="High Equity Need", level=2, color="orange",
                    description="Significant barriers to care - prioritize")),
    (40, EquityTier(tier="Moderate Equity Need", level=3, color="yellow",
                    description="Some barriers to care")),
)
STANDARD_TIER = EquityTier(tier="Standard", level=4, color="blue", description="Minimal barriers to care")


def effective_urgency(patient: Patient, default: int = 5) -> int:
    """Return the patient's urgency on the 1-10 scale.

    The AI-assessed score wins over the self-reported level; missing values
    fall back to ``default`` and out-of-range values are clamped.
    """
    raw: float = default
    if patient.ai_urgency_score is not None:
        raw = patient.ai_urgency_score
    elif patient.urgency_level is not None:
        raw = patient.urgency_level
    return round_half_up(clamp(raw, MIN_URGENCY, MAX_URGENCY))


def reported_urgency(patient: Patient, default: int = 5) -> int:
    """Return the urgency used by the equity score.

    The reported level wins here; the AI score only fills in when it is missing.
    """
    raw: float = default
    if patient.urgency_level is not None:
        raw = patient.urgency_level
    elif patient.ai_urgency_score is not None:
        raw = patient.ai_urgency_score
    return round_half_up(clamp(raw, MIN_URGENCY, MAX_URGENCY))


def wait_days(patient: Patient) -> int:
    return max(patient.wait_time_days or 0, 0)


class EquityScorer:
    """Computes a bounded-integer equity score from patient attributes."""

    def __init__(self, default_urgency: int = 5) -> None:
        self.default_urgency = default_urgency

    def _components(self, patient: Patient) -> list[tuple[str, int, str, bool]]:
        """Return ``(label, score, description, always_shown)`` per factor."""
        urgency = reported_urgency(patient, self.default_urgency)
        days = wait_days(patient)
        if patient.transportation is not None and normalize_key(patient.transportation) not in TRANSPORT_WEIGHTS:
            logger.debug("Unrecognized transportation %r for %s", patient.transportation, patient.id)
        if patient.insurance is not None and normalize_key(patient.insurance) not in INSURANCE_WEIGHTS:
            logger.debug("Unrecognized insurance %r for %s", patient.insurance, patient.id)
        return [
            ("Clinical Urgency", urgency * URGENCY_POINTS_PER_LEVEL, f"Level {urgency}/10", True),
            ("Wait Time", min(days * WAIT_POINTS_PER_DAY, MAX_WAIT_POINTS), f"{days} days waiting", True),
            ("Insurance Barrier", lookup(INSURANCE_WEIGHTS, patient.insurance, DEFAULT_ACCESS_WEIGHT),
             patient.insurance or "Unknown", True),
            ("Transportation", lookup(TRANSPORT_WEIGHTS, patient.transportation, DEFAULT_ACCESS_WEIGHT),
             patient.transportation or "Unknown", True),
            ("Housing Insecurity", lookup(HOUSING_WEIGHTS, patient.housing_status, 0),
             patient.housing_status or "", False),
            ("Food Insecurity", lookup(FOOD_SECURITY_WEIGHTS, patient.food_security, 0),
             patient.food_security or "", False),
            ("Employment Barrier", lookup(EMPLOYMENT_WEIGHTS, patient.employment_status, 0),
             patient.employment_status or "", False),
            ("Language Barrier", lookup(LANGUAGE_BARRIER_WEIGHTS, patient.language_barrier, 0),
             patient.language_barrier or "", False),
            ("Limited Support Network", lookup(SUPPORT_NETWORK_WEIGHTS, patient.support_network, 0),
             patient.support_network or "", False),
            ("Low Income", lookup(INCOME_WEIGHTS, patient.income, 0), patient.income or "", False),
        ]

    def score(self, patient: Patient) -> int:
        """Calculate the equity score (0-200+, higher means more barriers)."""
        return sum(score for _, score, _, _ in self._components(patient))

    def breakdown(self, patient: Patient) -> EquityBreakdown:
        """Explain which factors contribute to the equity score.

        Clinical, wait, insurance and transport factors are always listed;
        social-determinant factors only when they contribute. Factors are
        ordered by score, largest first.
        """
        factors = [
            EquityFactor(label=label, score=score, description=description)
            for label, score, description, always in self._components(patient)
            if always or score > 0
        ]
        factors.sort(key=lambda f: f.score, reverse=True)
        return EquityBreakdown(total=sum(f.score for f in factors), factors=factors)

    @staticmethod
    def tier(score: int) -> EquityTier:
        """Bucket an equity score into an equity need tier."""
        for threshold, tier in EQUITY_TIERS:
            if score >= threshold:
                return tier.model_copy()
        return STANDARD_TIER.model_copy()


def calculate_equity_score(patient: Patient) -> int:
    """Module-level convenience wrapper around :meth:`EquityScorer.score`."""
    return EquityScorer().score(patient)
