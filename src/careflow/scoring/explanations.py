"""Human-readable rationale strings for match scores."""

from __future__ import annotations

from typing import TYPE_CHECKING

from careflow.core.types import PriorityTier
from careflow.core.utils import normalize_key


if TYPE_CHECKING:
    from careflow.core.models import Patient


TIER_PHRASES: dict[PriorityTier, str] = {
    PriorityTier.CRITICAL_WITH_BARRIERS: (
        "Critical + Equity Barriers: high-urgency patient with access barriers, fast-tracked"
    ),
    PriorityTier.EMERGENT: "Emergent: high medical risk requiring prompt attention",
    PriorityTier.EXTENDED_WAIT: "Extended Wait: waiting more than two weeks, prioritized to prevent further delay",
    PriorityTier.STANDARD: "Standard: stable, routine scheduling",
}

URGENCY_PHRASES: tuple[tuple[float, str], ...] = (
    (9, "Critical urgency: {score:g}/10"),
    (7, "High urgency: {score:g}/10"),
    (5, "Moderate urgency: {score:g}/10"),
)

BARRIER_PHRASES: tuple[tuple[float, str], ...] = (
    (7, "Multiple equity barriers: prioritized for equitable access"),
    (4, "Equity barriers identified: boosted priority"),
)

WAIT_PHRASE = "Waiting {days} day(s) for care"
NEAREST_PHRASE = "Nearest available location"
NEAREST_THRESHOLD = 8
INSURANCE_ACCEPTED_PHRASE = "Accepts {insurance}"
INSURANCE_MISMATCH_PHRASE = "{insurance} not listed as accepted: verify coverage"
UNINSURED_PHRASE = "Uninsured: equity priority applied"


def _first_matching(value: float, phrases: tuple[tuple[float, str], ...]) -> str | None:
    for threshold, phrase in phrases:
        if value >= threshold:
            return phrase
    return None


def build_explanation(
    patient: Patient,
    *,
    priority_tier: PriorityTier,
    urgency_score: float,
    wait_days: int,
    distance_score: float,
    barrier_bonus: float,
    insurance_match_score: float,
) -> str:
    """Concatenate template phrases for the sub-scores that stand out.

    Phrases follow a fixed order (tier, urgency, wait, barriers, proximity,
    insurance) and are joined with ``". "``; the result always ends in a period.
    """
    reasons = [TIER_PHRASES[priority_tier]]
    if urgency_phrase := _first_matching(urgency_score, URGENCY_PHRASES):
        reasons.append(urgency_phrase.format(score=urgency_score))
    if wait_days >= 1:
        reasons.append(WAIT_PHRASE.format(days=wait_days))
    if barrier_phrase := _first_matching(barrier_bonus, BARRIER_PHRASES):
        reasons.append(barrier_phrase)
    if distance_score >= NEAREST_THRESHOLD:
        reasons.append(NEAREST_PHRASE)
    if normalize_key(patient.insurance) == "uninsured":
        reasons.append(UNINSURED_PHRASE)
    elif patient.insurance:
        if insurance_match_score >= 10:
            reasons.append(INSURANCE_ACCEPTED_PHRASE.format(insurance=patient.insurance))
        elif insurance_match_score < 5:
            reasons.append(INSURANCE_MISMATCH_PHRASE.format(insurance=patient.insurance))
    return ". ".join(reasons) + "."
