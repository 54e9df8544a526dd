"""Application settings and configuration."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringWeights(BaseModel):
    """Weights applied to the 0-10 sub-scores; the defaults sum to 100 at maximum."""

    urgency: float = 4.0
    wait_time: float = 2.0
    distance: float = 1.5
    barriers: float = 1.5
    insurance: float = 1.0


class TierThresholds(BaseModel):
    """Priority tier bucketing thresholds."""

    critical_urgency: int = 8
    emergent_urgency: int = 6
    extended_wait_days: int = 14


class ScoringSettings(BaseModel):
    """Match scoring configuration."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    tiers: TierThresholds = Field(default_factory=TierThresholds)
    insurance_partial_credit: float = 3.0
    insurance_unknown_credit: float = 5.0
    default_urgency: int = 5


class MatchingSettings(BaseModel):
    """Candidate filtering and ranking configuration."""

    default_limit: int = 5
    distinct_doctors: bool = True
    require_specialty_match: bool = True
    require_insurance_match: bool = True
    generalist_specialty: str = "primary_care"


class PlanningSettings(BaseModel):
    """Coordination plan rule thresholds."""

    default_priority_tier: int = 3
    long_wait_minutes: int = 30
    high_equity_score: int = 70
    general_specialty: str = "general_medicine"


class StorageSettings(BaseModel):
    """Profile store configuration."""

    db_path: str = "careflow.db"


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Scoring Configuration
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)

    # Matching Configuration
    matching: MatchingSettings = Field(default_factory=MatchingSettings)

    # Planning Configuration
    planning: PlanningSettings = Field(default_factory=PlanningSettings)

    # Storage Configuration
    storage: StorageSettings = Field(default_factory=StorageSettings)

    # Logging
    log_level: str = "INFO"

    def __init__(self, **data: Any) -> None:
        """Initialize settings with environment variable overrides."""
        super().__init__(**data)
        self._load_env_overrides()

    def _load_env_overrides(self) -> None:
        """Load flat CAREFLOW_* environment variable overrides for nested settings."""
        # Matching overrides
        if limit := os.getenv("CAREFLOW_MATCH_LIMIT"):
            self.matching.default_limit = int(limit)
        if distinct := os.getenv("CAREFLOW_DISTINCT_DOCTORS"):
            self.matching.distinct_doctors = distinct.lower() in ("true", "1", "yes")

        # Scoring overrides
        if urgency := os.getenv("CAREFLOW_CRITICAL_URGENCY"):
            self.scoring.tiers.critical_urgency = int(urgency)
        if wait := os.getenv("CAREFLOW_EXTENDED_WAIT_DAYS"):
            self.scoring.tiers.extended_wait_days = int(wait)

        # Planning overrides
        if minutes := os.getenv("CAREFLOW_LONG_WAIT_MINUTES"):
            self.planning.long_wait_minutes = int(minutes)

        # Storage overrides
        if db_path := os.getenv("CAREFLOW_DB_PATH"):
            self.storage.db_path = db_path

        if level := os.getenv("CAREFLOW_LOG_LEVEL"):
            self.log_level = level.upper()
