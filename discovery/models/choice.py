"""
Choice model: one round's decision record.
"""

from datetime import datetime
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Choice(BaseModel):
    """
    The item a user picked over another, with their reason.

    styles holds the selected item's tags: the first is the primary style,
    the rest are secondary. keywords keeps duplicates since frequency matters
    to scoring.
    """

    model_config = ConfigDict(frozen=True)

    round: int = Field(ge=1)
    selected_item_id: str
    rejected_item_id: str
    styles: Tuple[str, ...] = Field(min_length=1)
    rationale: str
    keywords: Tuple[str, ...] = ()
    created_at: datetime

    @property
    def primary_style(self) -> str:
        return self.styles[0]

    @property
    def secondary_styles(self) -> Tuple[str, ...]:
        return self.styles[1:]
