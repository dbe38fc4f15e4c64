"""Pipeline stages: keywords, scoring, convergence, recommendation set, pairing."""

from .convergence import (
    estimate_remaining_rounds,
    progress_message,
    second_best,
    should_stop,
    top_styles,
)
from .keywords import DESIGN_VOCABULARY, extract_keywords
from .pairing import select_pair
from .recommendation_set import (
    DEFAULT_RECOMMENDATION_COUNT,
    build_recommendation_set,
    recommend,
)
from .scoring import score_choices

__all__ = [
    "DESIGN_VOCABULARY",
    "DEFAULT_RECOMMENDATION_COUNT",
    "build_recommendation_set",
    "estimate_remaining_rounds",
    "extract_keywords",
    "progress_message",
    "recommend",
    "score_choices",
    "second_best",
    "select_pair",
    "should_stop",
    "top_styles",
]
