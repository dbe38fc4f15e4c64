"""
Choice construction: validate a round's raw input and build the immutable Choice.
"""

from datetime import datetime
from typing import List, Optional

from .errors import UnknownItem, ValidationError
from .models.analysis import AnalysisResult
from .models.catalog import CandidateItem
from .models.choice import Choice
from .models.config import DEFAULT_CONFIG, DiscoveryConfig
from .models.session import utc_now
from .stages.keywords import extract_keywords
from .validators import sanitize_input, validate_rationale


def _find_item(item_id: str, pool: List[CandidateItem]) -> CandidateItem:
    for item in pool:
        if item.id == item_id:
            return item
    raise UnknownItem(item_id)


def build_choice(
    round_number: int,
    selected_item_id: str,
    rejected_item_id: str,
    rationale: str,
    pool: List[CandidateItem],
    analysis: Optional[AnalysisResult] = None,
    config: DiscoveryConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> Choice:
    """
    Build a Choice for round_number.

    Styles come from the selected item (primary first). Keywords come from the
    analysis when one is given, otherwise from keyword extraction.

    Raises:
        ValidationError: Rationale out of bounds, or selected == rejected.
        UnknownItem: Either item id is not in the pool.
    """
    text = validate_rationale(sanitize_input(rationale), config)
    if selected_item_id == rejected_item_id:
        raise ValidationError("Selected and rejected items must differ", field="rejected_item_id")
    selected = _find_item(selected_item_id, pool)
    _find_item(rejected_item_id, pool)

    if analysis is not None:
        keywords = [kw.lower() for kw in analysis.keywords]
    else:
        keywords = extract_keywords(text)

    return Choice(
        round=round_number,
        selected_item_id=selected.id,
        rejected_item_id=rejected_item_id,
        styles=tuple(selected.styles),
        rationale=text,
        keywords=tuple(keywords),
        created_at=now or utc_now(),
    )
