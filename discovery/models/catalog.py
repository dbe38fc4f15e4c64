"""
Catalog models: static style and item reference data.

Built from styles.json / images.json dicts via model_validate(d). Both JSON
camelCase keys (displayName, primaryStyle, ...) and snake_case are accepted.
Loaded once and shared read-only; every model here is frozen.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StyleCatalogEntry(BaseModel):
    """A named decorative style."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    display_name: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)
    related_styles: List[str] = Field(default_factory=list)
    item_count: int = 0


class CandidateItem(BaseModel):
    """
    An image the user can choose between or be recommended.

    Fields beyond the style tags are display metadata and pass through untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="allow"
    )

    id: str
    primary_style: str
    secondary_styles: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    alt: Optional[str] = None

    @property
    def styles(self) -> List[str]:
        """Primary style first, then secondaries in catalog order."""
        return [self.primary_style, *self.secondary_styles]


class Catalog(BaseModel):
    """The style list and item pool, with id lookups."""

    model_config = ConfigDict(frozen=True)

    styles: List[StyleCatalogEntry]
    items: List[CandidateItem]

    def get_style(self, style_id: str) -> Optional[StyleCatalogEntry]:
        return next((s for s in self.styles if s.id == style_id), None)

    def get_item(self, item_id: str) -> Optional[CandidateItem]:
        return next((i for i in self.items if i.id == item_id), None)

    def validate_consistency(self) -> List[str]:
        """
        Check internal consistency of the catalog.

        Returns:
            List of error strings (empty if the catalog is usable).
        """
        errors = []
        style_ids = {s.id for s in self.styles}
        if not self.styles:
            errors.append("Catalog has no styles")
        if len(self.items) < 2:
            errors.append(f"Catalog needs at least 2 items, found {len(self.items)}")
        seen = set()
        for item in self.items:
            if item.id in seen:
                errors.append(f"Duplicate item id: {item.id}")
            seen.add(item.id)
            for style_id in item.styles:
                if style_id not in style_ids:
                    errors.append(f"Item {item.id} references unknown style '{style_id}'")
        for style in self.styles:
            for related in style.related_styles:
                if related not in style_ids:
                    errors.append(f"Style {style.id} lists unknown related style '{related}'")
        return errors


def ensure_items(items: List[Union[Dict[str, Any], CandidateItem]]) -> List[CandidateItem]:
    """Convert list of dicts or CandidateItems to list of CandidateItem models."""
    return [
        CandidateItem.model_validate(i) if isinstance(i, dict) else i
        for i in items
    ]
