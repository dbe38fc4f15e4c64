"""
Image pair selection for a discovery round.
"""

import random
from typing import Iterable, List, Optional, Tuple

from ..models.catalog import CandidateItem


def select_pair(
    pool: List[CandidateItem],
    excluded_ids: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> Tuple[CandidateItem, CandidateItem]:
    """
    Two distinct random items to choose between.

    Items in excluded_ids (typically already selected this session) are
    skipped while at least two others remain; otherwise the whole pool is used.
    """
    if len(pool) < 2:
        raise ValueError("Not enough items available")
    rng = rng or random.Random()
    excluded = set(excluded_ids)
    fresh = [item for item in pool if item.id not in excluded]
    source = fresh if len(fresh) >= 2 else list(pool)
    first, second = rng.sample(source, 2)
    return first, second
