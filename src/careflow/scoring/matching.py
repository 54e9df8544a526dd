"""Equity-aware patient-to-appointment matching.

Each candidate slot is scored on five 0-10 sub-scores:

1. Clinical urgency
2. Time already spent waiting
3. Geographic proximity (pluggable distance function)
4. Socioeconomic barriers (transportation, insurance, language, income)
5. Insurance acceptance

The weighted sum is scaled to 0-100. All functions here are pure: the same
patient, candidates and settings always produce the same ranking.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from careflow.config.settings import MatchingSettings, ScoringSettings
from careflow.core.models import MatchQuality, MatchScore, RankedMatch, RankedPatient
from careflow.core.types import PriorityTier, SlotStatus
from careflow.core.utils import clamp, lookup, normalize_key, round1, round_half_up
from careflow.scoring.distance import UNKNOWN_DISTANCE_SCORE, DistanceFunction, zip_prefix_distance
from careflow.scoring.equity import EquityScorer, effective_urgency, wait_days
from careflow.scoring.explanations import build_explanation
from careflow.scoring.tables import (
    ACCEPTS_ALL_INSURANCE,
    BARRIER_INSURANCE_TYPES,
    BARRIER_TRANSPORT_MODES,
    INSURANCE_BARRIER_FACTORS,
    TRANSPORT_BARRIER_FACTORS,
)


if TYPE_CHECKING:
    from collections.abc import Iterable

    from careflow.core.models import Appointment, Patient

logger = logging.getLogger(__name__)

MAX_SUB_SCORE = 10.0
WAIT_DAYS_PER_POINT = 3
BARRIER_FACTOR_SCALE = 0.5
LANGUAGE_BARRIER_BONUS = 2.0
LOW_INCOME_BONUS = 2.0


def match_quality(total_match_score: int, priority_tier: PriorityTier) -> MatchQuality:
    """Rate a match for display."""
    if priority_tier == PriorityTier.CRITICAL_WITH_BARRIERS or (
        priority_tier <= PriorityTier.EMERGENT and total_match_score >= 80
    ):
        return MatchQuality(rating="immediate", label="Immediate - Highest Priority", color="red")
    if total_match_score >= 80:
        return MatchQuality(rating="emergent", label="Emergent - High Priority", color="orange")
    if total_match_score >= 60:
        return MatchQuality(rating="urgent", label="Urgent - Timely Care", color="yellow")
    if total_match_score >= 40:
        return MatchQuality(rating="semi-urgent", label="Semi-Urgent", color="blue")
    return MatchQuality(rating="non-urgent", label="Non-Urgent", color="gray")


def validate_patient(patient: Patient) -> list[str]:
    """List the fields a patient record needs before it can be matched."""
    errors = []
    if not patient.id:
        errors.append("Patient ID is required")
    if not patient.specialty:
        errors.append("Medical specialty is required")
    if not patient.zip_code:
        errors.append("Zip code is required")
    if not patient.insurance:
        errors.append("Insurance information is required")
    return errors


class MatchRanker:
    """Scores and ranks candidate appointments for a patient."""

    def __init__(
        self,
        scoring: ScoringSettings | None = None,
        matching: MatchingSettings | None = None,
        distance: DistanceFunction = zip_prefix_distance,
        equity: EquityScorer | None = None,
    ) -> None:
        self.scoring = scoring or ScoringSettings()
        self.matching = matching or MatchingSettings()
        self.distance = distance
        self.equity = equity or EquityScorer(self.scoring.default_urgency)

    # Sub-scores

    def urgency_score(self, patient: Patient) -> float:
        return float(effective_urgency(patient, self.scoring.default_urgency))

    def wait_time_score(self, patient: Patient) -> float:
        """0 days scores 0, 30 or more days scores 10."""
        return round1(min(wait_days(patient) / WAIT_DAYS_PER_POINT, MAX_SUB_SCORE))

    def distance_score(self, patient: Patient, appointment: Appointment) -> float:
        try:
            score = float(self.distance(patient.zip_code, appointment.zip_code))
        except (TypeError, ValueError):
            logger.warning(
                "Distance function failed for %s -> %s, using default", patient.id, appointment.id
            )
            return UNKNOWN_DISTANCE_SCORE
        return clamp(score, 0.0, MAX_SUB_SCORE)

    def barrier_bonus(self, patient: Patient) -> float:
        bonus = lookup(TRANSPORT_BARRIER_FACTORS, patient.transportation, 0) * BARRIER_FACTOR_SCALE
        bonus += lookup(INSURANCE_BARRIER_FACTORS, patient.insurance, 0) * BARRIER_FACTOR_SCALE
        if patient.language and normalize_key(patient.language) != "english":
            bonus += LANGUAGE_BARRIER_BONUS
        if normalize_key(patient.income) == "low":
            bonus += LOW_INCOME_BONUS
        return min(round1(bonus), MAX_SUB_SCORE)

    @staticmethod
    def accepts_insurance(appointment: Appointment, insurance: str | None) -> bool:
        """True when the slot names the patient's plan (substring either way) or all plans."""
        accepted = [normalize_key(i) for i in appointment.insurance_accepted if i]
        if any(i in ACCEPTS_ALL_INSURANCE for i in accepted):
            return True
        wanted = normalize_key(insurance)
        if not wanted:
            return False
        return any(wanted in i or i in wanted for i in accepted)

    def insurance_match_score(self, patient: Patient, appointment: Appointment) -> float:
        if not any(appointment.insurance_accepted):
            return self.scoring.insurance_unknown_credit
        if self.accepts_insurance(appointment, patient.insurance):
            return MAX_SUB_SCORE
        return self.scoring.insurance_partial_credit

    # Tiering

    @staticmethod
    def has_equity_barriers(patient: Patient) -> bool:
        return (
            normalize_key(patient.transportation) in BARRIER_TRANSPORT_MODES
            or normalize_key(patient.insurance) in BARRIER_INSURANCE_TYPES
        )

    def priority_tier(self, patient: Patient) -> PriorityTier:
        """Bucket a patient into tiers 1-4 (1 = highest priority)."""
        thresholds = self.scoring.tiers
        urgency = effective_urgency(patient, self.scoring.default_urgency)
        if urgency >= thresholds.critical_urgency and self.has_equity_barriers(patient):
            return PriorityTier.CRITICAL_WITH_BARRIERS
        if urgency >= thresholds.emergent_urgency:
            return PriorityTier.EMERGENT
        if wait_days(patient) > thresholds.extended_wait_days:
            return PriorityTier.EXTENDED_WAIT
        return PriorityTier.STANDARD

    # Scoring

    def score(self, patient: Patient, appointment: Appointment) -> MatchScore:
        """Score one patient-appointment pair."""
        weights = self.scoring.weights
        urgency = self.urgency_score(patient)
        wait = self.wait_time_score(patient)
        distance = self.distance_score(patient, appointment)
        barriers = self.barrier_bonus(patient)
        insurance = self.insurance_match_score(patient, appointment)

        weighted = (
            urgency * weights.urgency
            + wait * weights.wait_time
            + distance * weights.distance
            + barriers * weights.barriers
            + insurance * weights.insurance
        )
        total = int(clamp(round_half_up(weighted), 0, 100))
        tier = self.priority_tier(patient)

        return MatchScore(
            urgency_score=urgency,
            wait_time_score=wait,
            distance_score=distance,
            barrier_bonus=barriers,
            insurance_match_score=insurance,
            total_match_score=total,
            priority_tier=tier,
            reasoning_explanation=build_explanation(
                patient,
                priority_tier=tier,
                urgency_score=urgency,
                wait_days=wait_days(patient),
                distance_score=distance,
                barrier_bonus=barriers,
                insurance_match_score=insurance,
            ),
            equity_score=self.equity.score(patient),
        )

    # Filtering and ranking

    def _specialty_matches(self, specialty: str | None, appointment: Appointment) -> bool:
        wanted = normalize_key(specialty)
        offered = normalize_key(appointment.specialty)
        if not wanted or not offered:
            return True
        return offered in (wanted, normalize_key(self.matching.generalist_specialty))

    def is_eligible(self, patient: Patient, appointment: Appointment) -> bool:
        """Apply the candidate filters configured in :class:`MatchingSettings`."""
        if appointment.status != SlotStatus.AVAILABLE:
            return False
        if self.matching.require_specialty_match and not self._specialty_matches(
            patient.specialty, appointment
        ):
            return False
        if (
            self.matching.require_insurance_match
            and patient.insurance
            and any(appointment.insurance_accepted)
            and not self.accepts_insurance(appointment, patient.insurance)
        ):
            return False
        return True

    def rank(
        self, patient: Patient, candidates: Iterable[Appointment], limit: int | None = None
    ) -> list[RankedMatch]:
        """Return the best matches for a patient, highest score first.

        The sort is stable, so equal scores keep candidate order. With
        ``distinct_doctors`` only the best slot per doctor is kept.
        """
        if limit is None:
            limit = self.matching.default_limit
        if limit <= 0:
            return []

        eligible = [a for a in candidates if self.is_eligible(patient, a)]
        logger.debug("Patient %s: %d eligible candidates", patient.id, len(eligible))

        scored = [(appointment, self.score(patient, appointment)) for appointment in eligible]
        scored.sort(key=lambda pair: pair[1].total_match_score, reverse=True)

        results: list[RankedMatch] = []
        seen_doctors: set[str] = set()
        for appointment, scores in scored:
            if self.matching.distinct_doctors:
                key = appointment.doctor_id or f"slot:{appointment.id}"
                if key in seen_doctors:
                    continue
                seen_doctors.add(key)
            results.append(RankedMatch(
                appointment=appointment,
                scores=scores,
                quality=match_quality(scores.total_match_score, scores.priority_tier),
            ))
            if len(results) >= limit:
                break
        return results

    def rank_patients(
        self, appointment: Appointment, patients: Iterable[Patient], limit: int | None = None
    ) -> list[RankedPatient]:
        """Reverse matching: the waiting patients best suited to one slot.

        Only patients whose specialty equals the slot's are considered; they are
        ordered by priority tier, then by score.
        """
        if limit is None:
            limit = self.matching.default_limit
        if limit <= 0:
            return []
        offered = normalize_key(appointment.specialty)
        scored = [
            RankedPatient(patient=patient, scores=self.score(patient, appointment))
            for patient in patients
            if normalize_key(patient.specialty) == offered
        ]
        scored.sort(key=lambda r: (r.scores.priority_tier, -r.scores.total_match_score))
        return scored[:limit]
