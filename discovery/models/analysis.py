"""
Analysis result model: output of the text analysis provider.

Always the same shape regardless of source: either a tagged LLM analysis or the
deterministic keyword-extraction fallback.
"""

from typing import List, Literal

from pydantic import BaseModel, Field

LLM_SOURCE = "llm"
FALLBACK_SOURCE = "keyword_extraction"


class AnalysisResult(BaseModel):
    """Keywords, emotions, and style indicators extracted from a rationale."""

    keywords: List[str] = Field(default_factory=list)
    emotions: List[str] = Field(default_factory=list)
    style_indicators: List[str] = Field(default_factory=list)
    source: Literal["llm", "keyword_extraction"] = FALLBACK_SOURCE

    @property
    def is_fallback(self) -> bool:
        return self.source == FALLBACK_SOURCE

    @classmethod
    def fallback(cls, keywords: List[str]) -> "AnalysisResult":
        return cls(keywords=list(keywords), source=FALLBACK_SOURCE)
