"""
Discovery configuration: scoring weights, convergence thresholds, round
estimation, session lifetime, and rationale bounds.

DiscoveryConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file named by DISCOVERY_CONFIG_PATH); from_dict() merges it
with these defaults.
"""

from datetime import timedelta
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, model_validator


class DiscoveryConfig(BaseModel):
    """Configuration for preference scoring and convergence."""

    # -------------------------------------------------------------------------
    # Preference Scoring
    # score[style] = sum(primary_weight | secondary_weight) + keyword_bonus * keyword hits
    # -------------------------------------------------------------------------

    # Weight added for the first (primary) style tag of each selected item.
    primary_weight: float = 2.0
    # Weight added for every further (secondary) style tag.
    secondary_weight: float = 1.0
    # Per-occurrence bonus for a vocabulary keyword lexically linked to a style id.
    keyword_bonus: float = 0.1

    # -------------------------------------------------------------------------
    # Convergence
    # Stop when completed_rounds >= max_rounds, or when past min_rounds and
    # top >= confidence_threshold and (top - second) >= gap_threshold.
    # -------------------------------------------------------------------------

    min_rounds: int = 6
    max_rounds: int = 15
    confidence_threshold: float = 0.6
    gap_threshold: float = 0.2

    # -------------------------------------------------------------------------
    # Round Estimation
    # Bands are (top score floor, target total rounds), highest floor first.
    # -------------------------------------------------------------------------

    # Below this many completed rounds the estimate is unknown.
    estimation_min_rounds: int = 3
    estimation_bands: List[Tuple[float, int]] = [(0.7, 8), (0.5, 10)]
    # Target total rounds when the top score is below every band.
    estimation_fallback_target: int = 12
    # Estimate returned when rounds are known but there are no scores yet.
    estimation_default: int = 10

    # -------------------------------------------------------------------------
    # Recommendations, Session, Rationale, Analysis
    # -------------------------------------------------------------------------

    recommendation_count: int = 10
    # Fixed window from creation; access never extends it.
    session_ttl_hours: float = 24.0
    rationale_min_length: int = 10
    rationale_max_length: int = 500
    analysis_timeout_seconds: float = 5.0

    @model_validator(mode="after")
    def check_ranges(self):
        if self.primary_weight <= 0 or self.secondary_weight <= 0:
            raise ValueError("Style weights must be positive")
        if self.keyword_bonus < 0:
            raise ValueError(f"keyword_bonus must be >= 0, got {self.keyword_bonus}")
        if self.min_rounds < 1 or self.min_rounds > self.max_rounds:
            raise ValueError(
                f"Need 1 <= min_rounds <= max_rounds, got {self.min_rounds} and {self.max_rounds}"
            )
        for name in ("confidence_threshold", "gap_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        floors = [floor for floor, _ in self.estimation_bands]
        if floors != sorted(floors, reverse=True):
            raise ValueError("estimation_bands must be ordered by descending score floor")
        if self.rationale_min_length > self.rationale_max_length:
            raise ValueError("rationale_min_length exceeds rationale_max_length")
        return self

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(hours=self.session_ttl_hours)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "DiscoveryConfig":
        """Create config from a dictionary of nested groups (e.g., loaded from JSON)."""
        flat = {}
        if "scoring" in config_dict:
            flat.update(config_dict["scoring"])
        if "convergence" in config_dict:
            flat.update(config_dict["convergence"])
        if "estimation" in config_dict:
            est = config_dict["estimation"]
            if "min_rounds" in est:
                flat["estimation_min_rounds"] = est["min_rounds"]
            if "bands" in est:
                flat["estimation_bands"] = [tuple(band) for band in est["bands"]]
            if "fallback_target" in est:
                flat["estimation_fallback_target"] = est["fallback_target"]
            if "default" in est:
                flat["estimation_default"] = est["default"]
        if "recommendations" in config_dict:
            flat["recommendation_count"] = config_dict["recommendations"].get("count", 10)
        if "session" in config_dict:
            flat["session_ttl_hours"] = config_dict["session"].get("ttl_hours", 24.0)
        if "rationale" in config_dict:
            rat = config_dict["rationale"]
            flat["rationale_min_length"] = rat.get("min_length", 10)
            flat["rationale_max_length"] = rat.get("max_length", 500)
        if "analysis" in config_dict:
            flat["analysis_timeout_seconds"] = config_dict["analysis"].get("timeout_seconds", 5.0)
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = DiscoveryConfig()


def resolve_config(config: Optional["DiscoveryConfig"]) -> "DiscoveryConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
