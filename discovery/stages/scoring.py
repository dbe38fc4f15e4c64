"""
Preference scoring: turn the full choice history into a normalized
per-style confidence distribution.

Recomputed from scratch every round, never updated incrementally, so the
persisted and recomputed distributions cannot drift.

Steps:
1. Primary style tag adds primary_weight, each secondary tag adds secondary_weight.
2. Count keyword occurrences across all choices (not deduplicated).
3. For each scored style, add keyword_bonus per occurrence of any vocabulary
   keyword that contains the style id or is contained in it.
4. Divide by the maximum so the top style is exactly 1.0.
"""

import logging
from collections import Counter, defaultdict
from typing import Dict, Iterable, Sequence

from ..models.choice import Choice
from ..models.config import DEFAULT_CONFIG, DiscoveryConfig
from .keywords import DESIGN_VOCABULARY

logger = logging.getLogger(__name__)


def _accumulate_style_weights(
    choices: Sequence[Choice],
    config: DiscoveryConfig,
) -> Dict[str, float]:
    """Raw per-style weight from the primary and secondary tags of each choice."""
    totals: Dict[str, float] = defaultdict(float)
    for choice in choices:
        totals[choice.primary_style] += config.primary_weight
        for style in choice.secondary_styles:
            totals[style] += config.secondary_weight
    return dict(totals)


def _count_keywords(choices: Sequence[Choice]) -> Counter:
    """Keyword frequency across all choices; each occurrence counts."""
    counts: Counter = Counter()
    for choice in choices:
        counts.update(choice.keywords)
    return counts


def _keyword_affinity(style_id: str, keyword_counts: Counter, vocabulary: Iterable[str]) -> int:
    """Occurrences of vocabulary keywords lexically linked to style_id."""
    return sum(
        keyword_counts.get(kw, 0)
        for kw in vocabulary
        if kw in style_id or style_id in kw
    )


def _normalize(totals: Dict[str, float]) -> Dict[str, float]:
    """Divide by the max value; empty (or all-zero) input gives an empty mapping."""
    if not totals:
        return {}
    max_score = max(totals.values())
    if max_score <= 0:
        return {}
    return {style: value / max_score for style, value in totals.items()}


def score_choices(
    choices: Sequence[Choice],
    config: DiscoveryConfig = DEFAULT_CONFIG,
    vocabulary: Iterable[str] = DESIGN_VOCABULARY,
) -> Dict[str, float]:
    """
    Score latent style preference from a choice history.

    Returns:
        Mapping style id -> score in [0, 1]; the best style is exactly 1.0.
        Empty when there are no choices.
    """
    if not choices:
        return {}

    totals = _accumulate_style_weights(choices, config)
    keyword_counts = _count_keywords(choices)

    vocab = tuple(vocabulary)
    for style in list(totals):
        bonus = _keyword_affinity(style, keyword_counts, vocab)
        if bonus:
            totals[style] += bonus * config.keyword_bonus

    scores = _normalize(totals)
    logger.debug("Scored %d choices into %d styles", len(choices), len(scores))
    return scores
