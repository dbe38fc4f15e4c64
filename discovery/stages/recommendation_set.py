"""
Recommendation set: the ranked display set for a winning style.

Partitions the pool (minus excluded ids) into primary-style matches and
secondary-style matches, shuffles each partition independently, and returns
primary-then-secondary truncated to count.

The public entry points are build_recommendation_set and recommend.
"""

import logging
import random
from typing import Iterable, List, Optional, Tuple

from ..models.catalog import CandidateItem
from ..models.recommendation import RecommendationSet

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION_COUNT = 10


def _partition_matches(
    style_id: str,
    pool: Iterable[CandidateItem],
    excluded_ids: set,
) -> Tuple[List[CandidateItem], List[CandidateItem]]:
    """Split non-excluded items into (primary matches, secondary matches)."""
    primary: List[CandidateItem] = []
    secondary: List[CandidateItem] = []
    for item in pool:
        if item.id in excluded_ids:
            continue
        if item.primary_style == style_id:
            primary.append(item)
        elif style_id in item.secondary_styles:
            secondary.append(item)
    return primary, secondary


def _shuffled(items: List[CandidateItem], rng: random.Random) -> List[CandidateItem]:
    """Uniform permutation of a copy of items."""
    out = list(items)
    rng.shuffle(out)
    return out


def build_recommendation_set(
    style_id: str,
    excluded_ids: Iterable[str],
    pool: Iterable[CandidateItem],
    count: int = DEFAULT_RECOMMENDATION_COUNT,
    rng: Optional[random.Random] = None,
) -> List[CandidateItem]:
    """
    Build the display list for style_id.

    Never includes an excluded id. Length is min(count, total matches), so an
    empty list means the pool has nothing for this style.
    """
    if count <= 0:
        return []
    rng = rng or random.Random()
    primary, secondary = _partition_matches(style_id, pool, set(excluded_ids))
    if not primary and not secondary:
        logger.info("No candidate items for style '%s'", style_id)
        return []
    return (_shuffled(primary, rng) + _shuffled(secondary, rng))[:count]


def recommend(
    style_id: str,
    excluded_ids: Iterable[str],
    pool: Iterable[CandidateItem],
    count: int = DEFAULT_RECOMMENDATION_COUNT,
    rng: Optional[random.Random] = None,
) -> RecommendationSet:
    """build_recommendation_set wrapped as a RecommendationSet."""
    items = build_recommendation_set(style_id, excluded_ids, pool, count, rng)
    return RecommendationSet(style_id=style_id, items=items)
