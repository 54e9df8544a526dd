"""Configuration module."""

from careflow.config.settings import (
    MatchingSettings,
    PlanningSettings,
    ScoringSettings,
    ScoringWeights,
    Settings,
    StorageSettings,
    TierThresholds,
)

__all__ = [
    "MatchingSettings",
    "PlanningSettings",
    "ScoringSettings",
    "ScoringWeights",
    "Settings",
    "StorageSettings",
    "TierThresholds",
]
