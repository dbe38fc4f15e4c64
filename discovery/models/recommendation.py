"""
Recommendation set model: ephemeral display set for one style. Never persisted.
"""

from typing import List

from pydantic import BaseModel

from .catalog import CandidateItem


class RecommendationSet(BaseModel):
    """Ordered items for a style: primary-style matches first, then secondary."""

    style_id: str
    items: List[CandidateItem]

    @property
    def is_empty(self) -> bool:
        return not self.items
