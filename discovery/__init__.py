"""
Style Discovery: preference scoring and convergence core.

Single entry point for the discovery package:
- models/: DiscoveryConfig, Choice, Session, Phase, catalog models
- stages/: keywords, scoring, convergence, recommendation_set, pairing
- state_machine: SessionStateMachine and the SessionStore protocol
- analysis/: optional LLM rationale analysis with keyword fallback
"""

from .choices import build_choice
from .errors import (
    DiscoveryError,
    InvalidTransition,
    NoAlternativeAvailable,
    ProviderFailure,
    StaleSession,
    UnknownItem,
    ValidationError,
)
from .models import (
    DEFAULT_CONFIG,
    AnalysisResult,
    CandidateItem,
    Catalog,
    Choice,
    DiscoveryConfig,
    Phase,
    RecommendationSet,
    Session,
    StyleCatalogEntry,
    resolve_config,
)
from .stages import (
    DESIGN_VOCABULARY,
    build_recommendation_set,
    estimate_remaining_rounds,
    extract_keywords,
    progress_message,
    recommend,
    score_choices,
    second_best,
    select_pair,
    should_stop,
    top_styles,
)
from .state_machine import SessionStateMachine, SessionStore, ensure_fresh
from .validators import sanitize_input, validate_item_id, validate_rationale

__all__ = [
    "DEFAULT_CONFIG",
    "DESIGN_VOCABULARY",
    "AnalysisResult",
    "CandidateItem",
    "Catalog",
    "Choice",
    "DiscoveryConfig",
    "DiscoveryError",
    "InvalidTransition",
    "NoAlternativeAvailable",
    "Phase",
    "ProviderFailure",
    "RecommendationSet",
    "Session",
    "SessionStateMachine",
    "SessionStore",
    "StaleSession",
    "StyleCatalogEntry",
    "UnknownItem",
    "ValidationError",
    "build_choice",
    "build_recommendation_set",
    "ensure_fresh",
    "estimate_remaining_rounds",
    "extract_keywords",
    "progress_message",
    "recommend",
    "resolve_config",
    "sanitize_input",
    "score_choices",
    "second_best",
    "select_pair",
    "should_stop",
    "top_styles",
    "validate_item_id",
    "validate_rationale",
]
