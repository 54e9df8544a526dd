"""A small ordered rule engine for plan generation.

A rule pairs a predicate with a factory. Rules are evaluated in declaration
order and every rule whose predicate holds contributes one item.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from careflow.config.settings import PlanningSettings
from careflow.core.types import PriorityTier
from careflow.core.utils import normalize_key


if TYPE_CHECKING:
    from careflow.core.models import Appointment, Patient

T = TypeVar("T")

LIMITED_TRANSPORT_MODES = frozenset({"limited", "public transit"})
FINANCIAL_NAVIGATION_INSURANCE = frozenset({"medicaid", "uninsured"})


@dataclass(frozen=True)
class PlanContext:
    """Inputs visible to plan rules."""

    priority_tier: PriorityTier
    patient: Patient
    appointment: Appointment
    equity_score: int
    settings: PlanningSettings = field(default_factory=PlanningSettings)

    @property
    def is_critical(self) -> bool:
        return self.priority_tier <= PriorityTier.EMERGENT

    @property
    def condition(self) -> str:
        return (self.patient.medical_condition or "").lower()

    @property
    def location(self) -> str:
        return self.appointment.location

    @property
    def has_limited_transport(self) -> bool:
        return normalize_key(self.patient.transportation) in LIMITED_TRANSPORT_MODES

    @property
    def needs_financial_navigation(self) -> bool:
        return normalize_key(self.patient.insurance) in FINANCIAL_NAVIGATION_INSURANCE


@dataclass(frozen=True)
class Rule(Generic[T]):
    """One ``(predicate, factory)`` entry of a rule table."""

    name: str
    predicate: Callable[[PlanContext], bool]
    factory: Callable[[PlanContext], T]

    def applies(self, context: PlanContext) -> bool:
        return bool(self.predicate(context))


def always(_: PlanContext) -> bool:
    return True


def evaluate(
    rules: Sequence[Rule[T]],
    context: PlanContext,
    fallback: Callable[[PlanContext], T] | None = None,
) -> list[T]:
    """Run a rule table against a context.

    Args:
        rules: Rules in evaluation order.
        context: Plan inputs.
        fallback: Produces the single placeholder item used when no rule fires.

    Returns:
        One item per firing rule, in rule order.
    """
    items = [rule.factory(context) for rule in rules if rule.applies(context)]
    if not items and fallback is not None:
        items.append(fallback(context))
    return items


def fired(rules: Sequence[Rule[T]], context: PlanContext) -> list[str]:
    """Names of the rules whose predicates hold, for logging and tests."""
    return [rule.name for rule in rules if rule.applies(context)]
