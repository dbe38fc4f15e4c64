"""
Keyword extraction: pulls design vocabulary out of free-text rationales.

Whole-token matches only: no stemming and no partial matches, so "colors,"
with trailing punctuation does not match "colors". Output keeps input order and
duplicates.
"""

from typing import FrozenSet, Iterable, List

# Colors, materials, style adjectives, and spatial adjectives.
DESIGN_VOCABULARY = (
    "color", "colors", "bright", "dark", "neutral", "vibrant",
    "style", "modern", "traditional", "minimalist", "cozy", "contemporary",
    "furniture", "sofa", "table", "chair", "lighting",
    "space", "open", "compact", "airy", "cluttered",
    "texture", "wood", "metal", "fabric", "glass",
    "clean", "simple", "elegant", "ornate", "sleek",
    "light", "natural", "warm", "cool",
)

_VOCABULARY_SET: FrozenSet[str] = frozenset(DESIGN_VOCABULARY)


def extract_keywords(text: str, vocabulary: Iterable[str] = _VOCABULARY_SET) -> List[str]:
    """Return every whitespace-separated token of text found in the vocabulary."""
    vocab = vocabulary if isinstance(vocabulary, (set, frozenset)) else frozenset(vocabulary)
    return [word for word in (text or "").lower().split() if word in vocab]
