"""Data models for the discovery core."""

from .analysis import FALLBACK_SOURCE, LLM_SOURCE, AnalysisResult
from .catalog import CandidateItem, Catalog, StyleCatalogEntry, ensure_items
from .choice import Choice
from .config import DEFAULT_CONFIG, DiscoveryConfig, resolve_config
from .recommendation import RecommendationSet
from .session import Phase, Session, utc_now

__all__ = [
    "AnalysisResult",
    "CandidateItem",
    "Catalog",
    "Choice",
    "DEFAULT_CONFIG",
    "DiscoveryConfig",
    "FALLBACK_SOURCE",
    "LLM_SOURCE",
    "Phase",
    "RecommendationSet",
    "Session",
    "StyleCatalogEntry",
    "ensure_items",
    "resolve_config",
    "utc_now",
]
