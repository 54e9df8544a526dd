"""Care coordination plan generation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from careflow.config.settings import PlanningSettings
from careflow.core.models import Appointment, CoordinationPlan, Patient
from careflow.core.types import PriorityTier
from careflow.planning.rules import PlanContext, evaluate, fired
from careflow.planning.rulesets import (
    BOTTLENECK_RULES,
    CARE_TEAM_RULES,
    COMMUNICATION_RULES,
    OPTIMIZATION_RULES,
    REASONING_CHAIN,
    RESOURCE_RULES,
    TIMELINE,
    no_bottlenecks,
    standard_care,
)
from careflow.scoring.equity import EquityScorer


if TYPE_CHECKING:
    from careflow.core.models import MatchScore

logger = logging.getLogger(__name__)

MODEL_VERSION = "CareFlow-Coordination-v1.0"


def priority_label(tier: PriorityTier) -> str:
    if tier <= PriorityTier.EMERGENT:
        return "critical"
    if tier == PriorityTier.EXTENDED_WAIT:
        return "high"
    return "standard"


class CoordinationPlanBuilder:
    """Builds a static coordination plan for a confirmed match.

    The builder is stateless: it never fails and never performs I/O. Missing
    inputs fall back to defaults (tier 3, empty patient, unassigned room).
    """

    def __init__(
        self, settings: PlanningSettings | None = None, equity: EquityScorer | None = None
    ) -> None:
        self.settings = settings or PlanningSettings()
        self.equity = equity or EquityScorer()

    def _tier(self, priority_tier: int | None) -> PriorityTier:
        try:
            return PriorityTier(priority_tier)
        except ValueError:
            return PriorityTier(self.settings.default_priority_tier)

    def build(
        self,
        priority_tier: int | None,
        patient: Patient | None = None,
        appointment: Appointment | None = None,
        match_id: str | None = None,
        equity_score: int | None = None,
    ) -> CoordinationPlan:
        """Generate the plan document.

        Args:
            priority_tier: Match priority tier (1-4); out-of-range or missing
                values use the configured default.
            patient: Matched patient.
            appointment: Booked slot.
            match_id: Key for the plan; derived from the patient and slot ids
                when omitted.
            equity_score: Pre-computed equity score; recomputed when omitted.

        Returns:
            The coordination plan.
        """
        patient = patient or Patient()
        appointment = appointment or Appointment()
        tier = self._tier(priority_tier)
        if equity_score is None:
            equity_score = self.equity.score(patient)
        context = PlanContext(
            priority_tier=tier,
            patient=patient,
            appointment=appointment,
            equity_score=equity_score,
            settings=self.settings,
        )
        plan_id = match_id or f"{patient.id or 'patient'}_{appointment.id or 'slot'}"
        logger.debug(
            "Plan %s: bottlenecks=%s optimizations=%s",
            plan_id,
            fired(BOTTLENECK_RULES, context),
            fired(OPTIMIZATION_RULES, context),
        )
        return CoordinationPlan(
            match_id=plan_id,
            priority=priority_label(tier),
            priority_tier=tier,
            care_team_assignments=evaluate(CARE_TEAM_RULES, context),
            resource_allocation=evaluate(RESOURCE_RULES, context),
            communication_plan=evaluate(COMMUNICATION_RULES, context),
            timeline=dict(TIMELINE),
            potential_bottlenecks=evaluate(BOTTLENECK_RULES, context, fallback=no_bottlenecks),
            optimization_suggestions=evaluate(OPTIMIZATION_RULES, context, fallback=standard_care),
            reasoning_chain=list(REASONING_CHAIN),
            model_version=MODEL_VERSION,
        )

    def build_for_match(
        self, scores: MatchScore, patient: Patient, appointment: Appointment, match_id: str | None = None
    ) -> CoordinationPlan:
        """Build from a :class:`MatchScore`, reusing its tier and equity score."""
        return self.build(
            scores.priority_tier, patient, appointment, match_id=match_id, equity_score=scores.equity_score
        )
