"""Common Pydantic models shared across routes."""

from typing import List, Optional

from pydantic import BaseModel


class ItemCard(BaseModel):
    id: str
    primary_style: str
    secondary_styles: List[str] = []
    url: Optional[str] = None
    alt: Optional[str] = None


class StyleCard(BaseModel):
    id: str
    display_name: str
    description: str = ""
    keywords: List[str] = []
    related_styles: List[str] = []
    item_count: int = 0
