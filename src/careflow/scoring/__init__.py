"""Scoring module - Equity scores, match scores and ranking."""

from __future__ import annotations

from careflow.scoring.distance import DistanceFunction, zip_prefix_distance
from careflow.scoring.equity import EquityScorer, calculate_equity_score
from careflow.scoring.matching import MatchRanker, match_quality, validate_patient


__all__ = [
    "DistanceFunction",
    "EquityScorer",
    "MatchRanker",
    "calculate_equity_score",
    "match_quality",
    "validate_patient",
    "zip_prefix_distance",
]
