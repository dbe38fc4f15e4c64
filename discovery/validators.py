"""Input validation for rationales and item ids."""

import re
from typing import Iterable

from .errors import ValidationError
from .models.catalog import CandidateItem
from .models.config import DEFAULT_CONFIG, DiscoveryConfig

_HTML_TAG = re.compile(r"<[^>]*>")


def sanitize_input(text: str) -> str:
    """Trim whitespace and strip HTML tags."""
    return _HTML_TAG.sub("", (text or "").strip())


def validate_rationale(text: str, config: DiscoveryConfig = DEFAULT_CONFIG) -> str:
    """
    Check the trimmed rationale length against the configured bounds.

    Returns:
        The trimmed rationale.

    Raises:
        ValidationError: If the trimmed text is too short or too long.
    """
    trimmed = (text or "").strip()
    if len(trimmed) < config.rationale_min_length:
        raise ValidationError(
            f"Explanation must be at least {config.rationale_min_length} characters",
            field="rationale",
        )
    if len(trimmed) > config.rationale_max_length:
        raise ValidationError(
            f"Explanation must be at most {config.rationale_max_length} characters",
            field="rationale",
        )
    return trimmed


def validate_item_id(item_id: str, pool: Iterable[CandidateItem]) -> bool:
    """True if item_id exists in the pool."""
    return any(item.id == item_id for item in pool)
