"""Planning module - Rule-driven care coordination plans."""

from __future__ import annotations

from careflow.planning.coordination import CoordinationPlanBuilder, priority_label
from careflow.planning.rules import PlanContext, Rule, evaluate


__all__ = [
    "CoordinationPlanBuilder",
    "PlanContext",
    "Rule",
    "evaluate",
    "priority_label",
]
